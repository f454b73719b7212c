"""YAML serialization helpers producing Umbrel-style documents."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import yaml
from yaml.representer import SafeRepresenter

from .text_utils import fold_lines, normalize_newlines

logger = logging.getLogger(__name__)


class QuotedStr(str):
    """A string that must be rendered with double quotes in YAML."""


class _UmbrelYamlDumper(yaml.SafeDumper):
    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:  # type: ignore[override]
        # PyYAML defaults to "indentless" sequences under mappings, producing:
        #   key:
        #   - item
        # Force indentation so it becomes:
        #   key:
        #     - item
        return super().increase_indent(flow, False)

    def choose_scalar_style(self) -> str:
        # Prefer double quotes wherever the emitter would fall back to single quotes.
        style = super().choose_scalar_style()
        if style == "'":
            return '"'
        return style

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _represent_quoted_str(dumper: yaml.SafeDumper, data: QuotedStr) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style='"')


_UmbrelYamlDumper.add_representer(QuotedStr, _represent_quoted_str)


def _represent_multiline_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    """Prefer literal block scalars for multi-line strings."""
    if "\n" in data or "\r" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", normalize_newlines(data), style="|")
    return SafeRepresenter.represent_str(dumper, data)


_UmbrelYamlDumper.add_representer(str, _represent_multiline_str)


def dump_yaml(data: Any) -> str:
    """Serialize data with 2-space indentation, no line wrapping and double-quote preference."""
    return yaml.dump(
        data,
        Dumper=_UmbrelYamlDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        indent=2,
        width=float("inf"),
    )


def folded_block(key: str, text: str) -> List[str]:
    """Render ``key: >-`` followed by the folded content of ``text``."""
    content = fold_lines(text)
    header = f"{key}: >-"
    first = next((line for line in content if line), "")
    if first.startswith(" "):
        # A more-indented first line would otherwise set the block indentation.
        header = f"{key}: >2-"
    return [header] + [f"  {line}" for line in content]


def splice_folded_block(yaml_text: str, key: str, text: str) -> str:
    """Replace whatever the dumper emitted for a top-level ``key`` with a folded block.

    The key line and all of its continuation lines (indented or blank) are
    consumed before normal output resumes.
    """
    trailing_newline = yaml_text.endswith("\n")
    lines = yaml_text[:-1].split("\n") if trailing_newline else yaml_text.split("\n")
    prefix = f"{key}:"
    output: List[str] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        if line == prefix or line.startswith(prefix + " "):
            output.extend(folded_block(key, text))
            index += 1
            while index < len(lines) and (not lines[index] or lines[index].startswith(" ")):
                index += 1
            continue
        output.append(line)
        index += 1
    result = "\n".join(output)
    return f"{result}\n" if trailing_newline else result


def write_text_file(text: str, path: Path) -> None:
    with path.open("w", encoding="utf-8") as handle:
        handle.write(text)
    logger.info("YAML written to %s", path)
