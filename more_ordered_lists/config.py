"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

NESTED_ALPHABETICAL_MODES = ("disabled", "bijective", "repeated")
CASE_STYLES = ("upper", "lower", "both", "none")

_NESTED_MODE_ALIASES = {"off": "disabled", "none": "disabled", "false": "disabled"}
_CASE_STYLE_ALIASES = {"uppercase": "upper", "lowercase": "lower"}


@dataclass
class ListConfig:
    """Configuration controlling which list markers are recognized.

    Attributes:
        enable_alphabetical: Recognize single-letter lists (``a.``, ``B)``).
        enable_roman: Recognize Roman numeral lists (``iv.``, ``(X)``).
        nested_alphabetical_mode: ``"disabled"``, ``"bijective"`` (``aa``,
            ``ab``, ``ac``) or ``"repeated"`` (``aa``, ``bb``, ``cc``).
        case_style: Letter cases to recognize: ``"upper"``, ``"lower"``,
            ``"both"`` or ``"none"``.
        enable_parentheses: Recognize ``a)`` and ``(a)`` separators.
        enable_legal_ordering: Start new nesting levels with the legal
            outline sequence ``A.``, ``I.``, ``1.``, ``a)``, ``aa)``, ``(1)``,
            ``(a)``, ``(aa)``, ``(i)``.
        max_file_size: Maximum file size in bytes processed by the CLI.
        max_line_length: Maximum line length allowed when reading files.

    Examples:
        ListConfig(enable_roman=False, nested_alphabetical_mode="repeated")
    """

    # Marker systems
    enable_alphabetical: bool = True
    enable_roman: bool = True
    nested_alphabetical_mode: str = "bijective"

    # Formatting
    case_style: str = "both"
    enable_parentheses: bool = True
    enable_legal_ordering: bool = False

    # Limits
    max_file_size: int = 10 * 1024 * 1024
    max_line_length: int = 10_000

    @property
    def has_uppercase(self) -> bool:
        return self.case_style in ("upper", "both")

    @property
    def has_lowercase(self) -> bool:
        return self.case_style in ("lower", "both")

    @property
    def nested_enabled(self) -> bool:
        return self.nested_alphabetical_mode != "disabled"


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`case_style` must be one of: upper, lower, both, none")
    """


CONFIG_TABLE = "more-ordered-lists"


def load_config(search_path: Path) -> ListConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.more-ordered-lists]`` table from `pyproject.toml` and the
    ``[more-ordered-lists]`` or ``[tool.more-ordered-lists]`` table from
    `.more-ordered-lists.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ListConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / f".{CONFIG_TABLE}.toml",
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ListConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> ListConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ListConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return ListConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return ListConfig()

    # TOML keys are conventionally dashed
    options = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return ListConfig(**options)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: ListConfig) -> ListConfig:
    nested_mode = config.nested_alphabetical_mode
    if nested_mode is False:
        nested_mode = "disabled"
    elif isinstance(nested_mode, str):
        nested_mode = _NESTED_MODE_ALIASES.get(nested_mode.lower(), nested_mode.lower())

    case_style = config.case_style
    if isinstance(case_style, str):
        case_style = _CASE_STYLE_ALIASES.get(case_style.lower(), case_style.lower())

    if nested_mode == config.nested_alphabetical_mode and case_style == config.case_style:
        return config
    return replace(config, nested_alphabetical_mode=nested_mode, case_style=case_style)


def validate_config(config: ListConfig) -> None:
    """Validate a `ListConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If switches are not booleans, the nested mode or case
            style is unknown, or numeric limits are non-positive.

    Examples:
        validate_config(ListConfig(case_style="lower"))
    """
    config = normalize_config(config)

    _ensure_booleans(
        {
            "enable_alphabetical": config.enable_alphabetical,
            "enable_roman": config.enable_roman,
            "enable_parentheses": config.enable_parentheses,
            "enable_legal_ordering": config.enable_legal_ordering,
        }
    )

    if config.nested_alphabetical_mode not in NESTED_ALPHABETICAL_MODES:
        raise ConfigError(
            "`nested_alphabetical_mode` must be one of: " + ", ".join(NESTED_ALPHABETICAL_MODES)
        )
    if config.case_style not in CASE_STYLES:
        raise ConfigError("`case_style` must be one of: " + ", ".join(CASE_STYLES))

    _ensure_integers(
        {
            "max_file_size": config.max_file_size,
            "max_line_length": config.max_line_length,
        }
    )
    _ensure_positive(
        {
            "max_file_size": config.max_file_size,
            "max_line_length": config.max_line_length,
        }
    )


def resolve_config(config: ListConfig | None) -> ListConfig:
    """Return a normalized, validated configuration, defaulting when omitted.

    Raises:
        ConfigError: If the configuration fails validation.
    """
    config = normalize_config(config or ListConfig())
    validate_config(config)
    return config


def apply_overrides(config: ListConfig, **overrides: object) -> ListConfig:
    """Apply override values to a `ListConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ListConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ListConfig`.

    Examples:
        updated = apply_overrides(config, enable_roman=False, case_style="lower")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ListConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ListConfig: Validated configuration ready for parsing.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), nested_alphabetical_mode="repeated")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_booleans(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, bool):
            raise ConfigError(f"`{key}` must be a boolean")


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
