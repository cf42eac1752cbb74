"""Thread-safe entry point: loading, hot reload, validation and battle start."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from dex.lookup import Dex

from .clauses import default_library
from .errors import RulesetError
from .library import BattleContext, Capability, LoggingSink, MessageSink, RuleLibrary, StatusEvent
from .registry import Format, FormatRegistry
from .resolver import EffectiveRuleset, RulesetResolver
from .schema import FormatDefinition
from .validator import TeamValidator

LOGGER = logging.getLogger(__name__)

DEFAULT_FORMATS_PATH = Path(__file__).resolve().parent / "data" / "formats.json"


@dataclass(frozen=True)
class CatalogSnapshot:
    """One consistent generation of the catalog."""

    registry: FormatRegistry
    resolver: RulesetResolver
    validator: TeamValidator
    excluded: Mapping[str, RulesetError]


@dataclass(frozen=True)
class TeamPreviewRequest:
    """Team preview settings for a format; ``picks`` of ``None`` means the whole team."""

    rule_id: str
    picks: Optional[int] = None


class FormatCatalog:
    """Owns the current registry snapshot and serves validation requests.

    ``reload`` builds a complete new snapshot before swapping it in, and
    every public call captures the snapshot once, so a validation that is
    running while a reload happens finishes against the old definitions.
    """

    def __init__(
        self,
        dex: Dex,
        definitions: Optional[Iterable[FormatDefinition]] = None,
        *,
        library_factory: Callable[[], RuleLibrary] = default_library,
        version: Optional[str] = None,
    ) -> None:
        self._dex = dex
        self._library_factory = library_factory
        self._lock = threading.Lock()
        self._json_cache: Dict[Path, int] = {}
        self._snapshot = self._build(FormatRegistry(definitions or (), library=library_factory(), version=version))

    # ------------------------------------------------------------------ loading
    @classmethod
    def from_json(cls, path: Union[str, Path], dex: Dex, **kwargs: Any) -> "FormatCatalog":
        catalog = cls(dex, **kwargs)
        catalog.load_from_json(path, force=True)
        return catalog

    def load_from_json(self, path: Union[str, Path], *, force: bool = False) -> bool:
        """Reload from a JSON table on disk; skipped if the file is unchanged."""

        path = Path(path)
        current_timestamp = path.stat().st_mtime_ns
        if not force and path in self._json_cache and self._json_cache[path] >= current_timestamp:
            LOGGER.debug("Format table %s unchanged, skipping reload", path)
            return False
        payload = json.loads(path.read_text(encoding="utf-8"))
        self.reload_payload(payload)
        self._json_cache[path] = current_timestamp
        return True

    def reload_payload(self, payload: Any) -> None:
        self._swap(self._build(FormatRegistry.from_payload(payload, library=self._library_factory())))

    def reload(self, definitions: Iterable[FormatDefinition], *, version: Optional[str] = None) -> None:
        registry = FormatRegistry(definitions, library=self._library_factory(), version=version)
        self._swap(self._build(registry))

    def _build(self, registry: FormatRegistry) -> CatalogSnapshot:
        resolver = RulesetResolver(registry)
        excluded: Dict[str, RulesetError] = dict(registry.rejected)
        excluded.update(resolver.validate_all())
        validator = TeamValidator(registry, self._dex, resolver=resolver)
        return CatalogSnapshot(registry=registry, resolver=resolver, validator=validator, excluded=excluded)

    def _swap(self, snapshot: CatalogSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot
        LOGGER.info(
            "Loaded %d definitions (version %s), %d excluded",
            len(snapshot.registry),
            snapshot.registry.version or "unversioned",
            len(snapshot.excluded),
        )

    @property
    def snapshot(self) -> CatalogSnapshot:
        with self._lock:
            return self._snapshot

    @property
    def dex(self) -> Dex:
        return self._dex

    # ------------------------------------------------------------------- access
    def resolve(self, format_id: str) -> EffectiveRuleset:
        return self.snapshot.resolver.resolve(format_id)

    def get(self, format_id: str) -> Format:
        return self.snapshot.registry.get(format_id)

    def list_formats(self, *, selectable_only: bool = True) -> List[Format]:
        snapshot = self.snapshot
        return [
            fmt
            for fmt in snapshot.registry.formats(selectable_only=selectable_only)
            if fmt.id not in snapshot.excluded
        ]

    @property
    def excluded(self) -> Mapping[str, RulesetError]:
        return self.snapshot.excluded

    def validate_team(self, team: Iterable[Any], format_id: str) -> List[str]:
        return self.snapshot.validator.validate_team(team, format_id)

    def validate_set(self, entry: Any, format_id: str) -> List[str]:
        return self.snapshot.validator.validate_set(entry, format_id)

    # ------------------------------------------------------------------ battles
    def start_battle(
        self,
        format_id: str,
        *,
        sink: Optional[MessageSink] = None,
        sides: Sequence[Tuple[str, Sequence[str]]] = (),
    ) -> BattleContext:
        """Run every start hook of the format, highest priority first."""

        snapshot = self.snapshot
        ruleset = snapshot.resolver.resolve(format_id)
        battle = BattleContext(
            format=snapshot.registry.get(ruleset.format_id),
            ruleset=ruleset,
            sink=sink or LoggingSink(),
            sides=sides,
        )
        starters = sorted(ruleset.rules_with(Capability.ON_START), key=lambda fmt: -fmt.rule.start_priority)
        for fmt in starters:
            fmt.rule.on_start(battle)
        return battle

    def allows_status(self, battle: BattleContext, event: StatusEvent) -> bool:
        """Ask every status hook whether ``event`` may happen."""

        for fmt in battle.ruleset.rules_with(Capability.ON_SET_STATUS):
            if not fmt.rule.on_set_status(event, battle):
                return False
        return True

    def team_preview(self, format_id: str) -> Optional[TeamPreviewRequest]:
        ruleset = self.snapshot.resolver.resolve(format_id)
        previews = ruleset.rules_with(Capability.ON_TEAM_PREVIEW)
        if not previews:
            return None
        first = previews[0]
        return TeamPreviewRequest(rule_id=first.id, picks=first.rule.team_preview_picks())


__all__ = ["CatalogSnapshot", "DEFAULT_FORMATS_PATH", "FormatCatalog", "TeamPreviewRequest"]
