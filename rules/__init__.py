"""Public package interface for format resolution and team validation."""

from .catalog import DEFAULT_FORMATS_PATH, CatalogSnapshot, FormatCatalog, TeamPreviewRequest
from .clauses import default_library
from .errors import (
    DuplicateFormatError,
    FormatNotFoundError,
    FormatSchemaError,
    InvalidRuleReferenceError,
    RulesetCycleError,
    RulesetError,
)
from .library import (
    BattleContext,
    BattlerStatus,
    Capability,
    LoggingSink,
    RecordingSink,
    Rule,
    RuleLibrary,
    StatusEvent,
    ValidationContext,
)
from .points import PointSystem
from .registry import Format, FormatRegistry
from .resolver import EffectiveRuleset, RulesetResolver
from .schema import (
    ComplexBan,
    EntityBan,
    FormatDefinition,
    FormatReference,
    FormatTable,
    RuleKind,
    get_format_json_schema,
)
from .team import PokemonSet, team_from_payload
from .validator import TeamValidator

__all__ = [
    "BattleContext",
    "BattlerStatus",
    "Capability",
    "CatalogSnapshot",
    "ComplexBan",
    "DEFAULT_FORMATS_PATH",
    "DuplicateFormatError",
    "EffectiveRuleset",
    "EntityBan",
    "Format",
    "FormatCatalog",
    "FormatDefinition",
    "FormatNotFoundError",
    "FormatReference",
    "FormatRegistry",
    "FormatSchemaError",
    "FormatTable",
    "InvalidRuleReferenceError",
    "LoggingSink",
    "PointSystem",
    "PokemonSet",
    "RecordingSink",
    "Rule",
    "RuleKind",
    "RuleLibrary",
    "RulesetCycleError",
    "RulesetError",
    "RulesetResolver",
    "StatusEvent",
    "TeamPreviewRequest",
    "TeamValidator",
    "ValidationContext",
    "default_library",
    "get_format_json_schema",
    "team_from_payload",
]
