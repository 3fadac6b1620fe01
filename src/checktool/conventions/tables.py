"""Canonical option, header and module tables with per-tool exceptions."""

from importlib import resources
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Mapping, NamedTuple, Optional, Tuple
import logging

import yaml

from ..utils.error_handling import ConfigurationError

logger = logging.getLogger(__name__)

OPTION_TYPES = frozenset({"", "s", "i", "H", "A", "h", "a", "m", "F"})


class OptionDescriptor(NamedTuple):
    """Expected value type code and short form of a standard option."""

    type: str
    short: str


class Conventions:
    """Read-only view over the convention tables.

    Every lookup consults the tool's exception entry first and falls back to
    the canonical table; the tables themselves are never changed after
    construction.
    """

    def __init__(self, data: Mapping[str, Any]):
        """Initialize from a parsed conventions document.

        Args:
            data: Mapping with the same layout as ``conventions.yaml``

        Raises:
            ConfigurationError: If a table is malformed
        """
        self._options = self._load_options(data.get("options") or {}, "options")
        self._option_exceptions = {
            str(tool): self._load_option_overrides(overrides or {}, tool)
            for tool, overrides in (data.get("option_exceptions") or {}).items()
        }

        self._headers = tuple(str(header) for header in data.get("headers") or ())
        self._header_exceptions = {
            str(tool): frozenset(str(h) for h in omitted or ())
            for tool, omitted in (data.get("header_exceptions") or {}).items()
        }

        modules = data.get("modules") or {}
        self._ignored_modules = _names(modules.get("ignore"))
        self._not_objects = _names(modules.get("not_objects"))
        self._dynamic_modules = {
            str(tool): _names(names) for tool, names in (modules.get("dynamic") or {}).items()
        }
        self._base_classes = {
            str(base): tuple(str(sub) for sub in subclasses or ())
            for base, subclasses in (modules.get("base_classes") or {}).items()
        }

        option_usage = data.get("option_usage") or {}
        self._ignored_options = _names(option_usage.get("ignore"))
        self._dsn_exempt = _names(option_usage.get("dsn_exempt"))

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Conventions":
        """Load conventions from a YAML file, or the packaged defaults.

        Args:
            path: Optional YAML file replacing the packaged tables

        Returns:
            Conventions instance
        """
        try:
            if path is None:
                text = resources.files(__package__).joinpath("conventions.yaml").read_text(encoding="utf-8")
                source = "packaged conventions"
            else:
                text = Path(path).read_text(encoding="utf-8")
                source = str(path)
            data = yaml.safe_load(text) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot load conventions: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Conventions in {source} must be a mapping")

        logger.debug(f"Loaded {source}")
        return cls(data)

    def option_descriptor(self, tool_name: str, option: str) -> Optional[OptionDescriptor]:
        """Return the expected descriptor for an option, or None if not standard."""
        canonical = self._options.get(option)
        if canonical is None:
            return None

        override = self._option_exceptions.get(tool_name, {}).get(option)
        if not override:
            return canonical
        return canonical._replace(**override)

    def required_headers(self, tool_name: str) -> Tuple[str, ...]:
        """Return the canonical header order minus the tool's omissions."""
        omitted = self._header_exceptions.get(tool_name, frozenset())
        return tuple(header for header in self._headers if header not in omitted)

    def is_ignored_module(self, module: str) -> bool:
        return module in self._ignored_modules

    def is_dynamic_module(self, tool_name: str, module: str) -> bool:
        return module in self._dynamic_modules.get(tool_name, frozenset())

    def is_not_object(self, module: str) -> bool:
        return module in self._not_objects

    def subclasses(self, module: str) -> Optional[Tuple[str, ...]]:
        """Return the subclasses of a base-class module, or None if it isn't one."""
        return self._base_classes.get(module)

    def is_ignored_option(self, option: str) -> bool:
        return option in self._ignored_options

    def is_dsn_exempt(self, tool_name: str) -> bool:
        return tool_name in self._dsn_exempt

    def _load_options(self, table: Mapping[str, Any], where: str) -> Dict[str, OptionDescriptor]:
        options = {}
        for option, spec in table.items():
            spec = spec or {}
            descriptor = OptionDescriptor(
                type=_field(spec, "type", option, where),
                short=_field(spec, "short", option, where),
            )
            options[str(option)] = descriptor
        return options

    def _load_option_overrides(self, table: Mapping[str, Any], tool: str) -> Dict[str, Dict[str, str]]:
        overrides = {}
        for option, spec in table.items():
            spec = spec or {}
            unknown = set(spec) - set(OptionDescriptor._fields)
            if unknown:
                raise ConfigurationError(
                    f"Unknown fields {sorted(unknown)} for {tool} --{option}", tool_name=tool
                )
            overrides[str(option)] = {
                key: _field(spec, key, option, f"option_exceptions.{tool}") for key in spec
            }
        return overrides


def _field(spec: Mapping[str, Any], key: str, option: str, where: str) -> str:
    value = spec.get(key)
    value = "" if value is None else str(value)

    if key == "type" and value not in OPTION_TYPES:
        raise ConfigurationError(f"Invalid type code {value!r} for --{option} in {where}")
    if key == "short" and len(value) > 1:
        raise ConfigurationError(f"Short form {value!r} for --{option} in {where} is not a single letter")
    return value


def _names(values: Optional[List[Any]]) -> FrozenSet[str]:
    return frozenset(str(value) for value in values or ())
