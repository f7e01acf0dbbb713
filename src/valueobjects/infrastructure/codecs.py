"""Text codecs — tree ⇄ JSON / YAML text.

JSON uses the stdlib encoder with compact separators by default, so a
compact document decodes and re-encodes byte for byte. YAML dumps with a
round-trip ruamel.yaml emitter (insertion order kept, block style) and
loads with the safe loader so decoded trees hold plain Python types;
unquoted timestamps stay strings.

Codec defaults come from :func:`valueobjects.config.settings.get_settings`.
"""

from __future__ import annotations

import json
from io import StringIO
from typing import Any, Protocol

from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from ruamel.yaml.error import YAMLError

from valueobjects.config.models import JsonCodecConfig, YamlCodecConfig
from valueobjects.config.settings import get_settings
from valueobjects.domain.errors import CodecError


class TextCodec(Protocol):
    """Converts a plain tree to text and back."""

    def encode(self, tree: Any) -> str: ...

    def decode(self, text: str) -> Any: ...


def _export_default(obj: Any) -> Any:
    """``json.dumps`` hook: serialize Exportable objects via ``to_tree()``."""
    from valueobjects.domain.export import Exportable

    if isinstance(obj, Exportable):
        return obj.to_tree()
    msg = f"Object of type {type(obj).__qualname__} is not JSON serializable"
    raise TypeError(msg)


class _TreeConstructor(SafeConstructor):
    """Safe constructor that leaves timestamps as plain strings."""


_TreeConstructor.add_constructor("tag:yaml.org,2002:timestamp", SafeConstructor.construct_yaml_str)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


class JsonCodec:
    """JSON text codec."""

    def __init__(self, config: JsonCodecConfig | None = None) -> None:
        self.config = config or JsonCodecConfig()

    def encode(self, tree: Any) -> str:
        """Encode *tree*; Exportable objects nested in it are exported too."""
        cfg = self.config
        separators: tuple[str, str] | None = None
        if cfg.compact:
            separators = (",", ":") if cfg.indent is None else (",", ": ")
        return json.dumps(
            tree,
            indent=cfg.indent,
            ensure_ascii=cfg.ensure_ascii,
            separators=separators,
            default=_export_default,
        )

    def decode(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"Invalid JSON: {exc}"
            raise CodecError(msg) from exc


# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------


class YamlCodec:
    """YAML text codec."""

    def __init__(self, config: YamlCodecConfig | None = None) -> None:
        self.config = config or YamlCodecConfig()

    def _new_yaml(self) -> YAML:
        """Create a fresh round-trip emitter.

        ruamel.yaml's YAML object is stateful; a failed dump can leave it
        broken, so every encode gets its own instance.
        """
        cfg = self.config
        y = YAML()
        y.default_flow_style = False
        y.explicit_start = cfg.explicit_start
        y.indent(
            mapping=cfg.indent,
            sequence=cfg.indent + cfg.sequence_dash_offset,
            offset=cfg.sequence_dash_offset,
        )
        return y

    def encode(self, tree: Any) -> str:
        buf = StringIO()
        self._new_yaml().dump(tree, buf)
        return buf.getvalue()

    def decode(self, text: str) -> Any:
        try:
            y = YAML(typ="safe")
            y.Constructor = _TreeConstructor
            return y.load(text)
        except YAMLError as exc:
            msg = f"Invalid YAML: {exc}"
            raise CodecError(msg) from exc


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

FORMATS: tuple[str, ...] = ("json", "yaml")
_FORMAT_ALIASES: dict[str, str] = {"json": "json", "yaml": "yaml", "yml": "yaml"}


def get_codec(fmt: str) -> TextCodec:
    """Return a codec for *fmt* configured from the current settings.

    Raises:
        CodecError: *fmt* is not a supported format name.
    """
    name = _FORMAT_ALIASES.get(fmt.strip().lower())
    if name is None:
        msg = f"Unsupported text format {fmt!r}; expected one of {list(FORMATS)}"
        raise CodecError(msg)

    settings = get_settings()
    if name == "json":
        return JsonCodec(settings.json_codec)
    return YamlCodec(settings.yaml_codec)
