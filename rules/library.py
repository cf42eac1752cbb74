"""Rule base class, capability flags and the registry of built-in rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Flag, auto
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple, TypeVar

from dex.entities import to_id
from dex.lookup import Dex

from .schema import FormatDefinition, RuleKind

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .registry import Format
    from .resolver import EffectiveRuleset
    from .team import PokemonSet

LOGGER = logging.getLogger(__name__)

#: Banlist key that switches on legality enforcement.
LEGALITY_MARKER = "illegal"


class Capability(Flag):
    """Hooks a rule implements. Dispatch only calls hooks flagged here."""

    NONE = 0
    ON_START = auto()
    VALIDATE_SET = auto()
    VALIDATE_TEAM = auto()
    ON_SET_STATUS = auto()
    ON_TEAM_PREVIEW = auto()


class MessageSink(Protocol):
    """Destination for battle announcements such as active clauses."""

    def emit(self, kind: str, *args: Any) -> None:  # pragma: no cover - protocol
        ...


class LoggingSink:
    """Sink that forwards announcements to :mod:`logging`."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or LOGGER

    def emit(self, kind: str, *args: Any) -> None:
        self._logger.info("|%s|%s", kind, "|".join(str(arg) for arg in args))


class RecordingSink:
    """Sink that keeps every announcement in memory."""

    def __init__(self) -> None:
        self.messages: List[Tuple[Any, ...]] = []

    def emit(self, kind: str, *args: Any) -> None:
        self.messages.append((kind, *args))


@dataclass
class ValidationContext:
    """Everything a rule needs while validating one team.

    A context lives for exactly one validation call. ``flags`` is scratch
    space for rules that need to carry state between sets.
    """

    dex: Dex
    format: "Format"
    ruleset: "EffectiveRuleset"
    flags: Dict[str, Any] = field(default_factory=dict)

    @property
    def gen(self) -> int:
        return self.format.gen

    @property
    def enforces_legality(self) -> bool:
        return self.ruleset.enforces_legality


@dataclass
class BattlerStatus:
    """Non-volatile status of one battler on the side being targeted."""

    status: Optional[str] = None
    inflicted_by_foe: bool = True


@dataclass
class StatusEvent:
    """A request to apply ``status`` to a battler on ``target_side``."""

    status: str
    target_side: Sequence[BattlerStatus] = ()
    self_inflicted: bool = False


@dataclass
class BattleContext:
    """Per-battle state exposed to start and status hooks."""

    format: "Format"
    ruleset: "EffectiveRuleset"
    sink: MessageSink
    sides: Sequence[Tuple[str, Sequence[str]]] = ()
    report_percentages: bool = False

    def add(self, kind: str, *args: Any) -> None:
        self.sink.emit(kind, *args)


class Rule:
    """Base class for clauses, banlists and other hook-bearing rules.

    Subclasses declare the hooks they implement in ``capabilities``; the
    validator and the battle start logic never call a hook whose flag is
    not set.
    """

    rule_id: str = ""
    name: str = ""
    kind: RuleKind = RuleKind.RULE
    capabilities: Capability = Capability.NONE
    banlist: Tuple[str, ...] = ()
    ruleset: Tuple[str, ...] = ()
    start_priority: int = 0

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def definition(self) -> FormatDefinition:
        """Default table entry registered for this rule."""

        return FormatDefinition(
            id=self.rule_id,
            name=self.name,
            effect_type=self.kind,
            ruleset=list(self.ruleset),
            banlist=list(self.banlist),
        )

    # -------------------------------------------------------------------- hooks
    # Inert defaults; subclasses override the hooks named in ``capabilities``.
    def on_start(self, battle: BattleContext) -> None:
        return None

    def validate_set(self, pokemon_set: "PokemonSet", context: ValidationContext) -> List[str]:
        return []

    def validate_team(self, team: Sequence["PokemonSet"], context: ValidationContext) -> List[str]:
        return []

    def on_set_status(self, event: StatusEvent, battle: BattleContext) -> bool:
        return True

    def team_preview_picks(self) -> Optional[int]:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rule_id!r})"


RuleT = TypeVar("RuleT", bound=Rule)


class RuleLibrary:
    """Registry keeping the mapping between rule identifiers and rule objects."""

    def __init__(self) -> None:
        self._rules: Dict[str, Rule] = {}

    def register(self, rule: RuleT) -> RuleT:
        rule_id = to_id(rule.rule_id or rule.name)
        if not rule_id:
            raise ValueError(f"Rule {rule!r} has no identifier")
        if rule_id in self._rules:
            raise ValueError(f"Rule already registered for '{rule_id}'")
        self._rules[rule_id] = rule
        return rule

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(to_id(rule_id))

    def definitions(self) -> List[FormatDefinition]:
        return [rule.definition() for rule in self._rules.values()]

    def __contains__(self, rule_id: object) -> bool:
        return isinstance(rule_id, str) and to_id(rule_id) in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


__all__ = [
    "BattleContext",
    "BattlerStatus",
    "Capability",
    "LEGALITY_MARKER",
    "LoggingSink",
    "MessageSink",
    "RecordingSink",
    "Rule",
    "RuleLibrary",
    "StatusEvent",
    "ValidationContext",
]
