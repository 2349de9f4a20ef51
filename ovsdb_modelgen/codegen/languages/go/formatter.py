"""
Go source validation and formatting.

Rendered code is parsed with tree-sitter-go. Code that does not parse, or
that is not a package clause followed by top-level declarations, is
rejected with a FormatError. Valid code is laid out the way gofmt lays out
the constructs the templates produce: struct fields aligned in columns,
tab indentation by nesting depth, single blank lines between sections.
"""

import math
import re
from typing import Any, Dict, List, Optional, Set, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ...core.generator import FormatError, SourceFormatter
from ....logging_config import get_logger

logger = get_logger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

TOP_LEVEL_NODES = frozenset(
    {
        "package_clause",
        "import_declaration",
        "type_declaration",
        "function_declaration",
        "method_declaration",
        "const_declaration",
        "var_declaration",
        "comment",
    }
)

# Nodes whose content is indented one level, with their opening and
# closing tokens. Case clauses have no closing token. Switch bodies are
# absent: case labels sit at the level of their switch.
INDENTING_NODES: Dict[str, Tuple[str, Optional[str]]] = {
    "block": ("{", "}"),
    "literal_value": ("{", "}"),
    "field_declaration_list": ("{", "}"),
    "interface_type": ("{", "}"),
    "argument_list": ("(", ")"),
    "parameter_list": ("(", ")"),
    "parenthesized_expression": ("(", ")"),
    "import_spec_list": ("(", ")"),
    "const_declaration": ("(", ")"),
    "var_declaration": ("(", ")"),
    "var_spec_list": ("(", ")"),
    "type_declaration": ("(", ")"),
    "expression_case": (":", None),
    "default_case": (":", None),
    "type_case": (":", None),
    "communication_case": (":", None),
}

# Output line: text, whether it is kept verbatim, and its key/value split
# (literal id, key cell, value) when it holds one keyed element
_Line = List[Any]

# gofmt thresholds for aligning keyed elements
_SMALL_KEY_SIZE = 40
_KEY_SIZE_RATIO = 2.5

# Literals whose continuation lines must be kept byte for byte
_VERBATIM_NODES = frozenset(
    {"raw_string_literal", "interpreted_string_literal", "comment"}
)


class GoFormatter(SourceFormatter):
    """Validates rendered Go code and formats it gofmt-style."""

    language_name = "go"
    file_extension = ".go"

    def format_source(self, source: str) -> str:
        """
        Validate and format Go source.

        Args:
            source: Rendered Go code

        Returns:
            Formatted code ending with a single newline

        Raises:
            FormatError: If the code does not parse or is not a valid
                Go source file
        """
        data = source.encode("utf-8")
        tree = Parser(GO_LANGUAGE).parse(data)
        root = tree.root_node

        if root.has_error:
            raise _syntax_error(root, data)

        logger.debug("Parsed %d bytes of Go source", len(data))
        return _Layout(root, data).render()


def _syntax_error(root: Node, data: bytes) -> FormatError:
    node = _first_error(root)
    if node is None:
        return FormatError("syntax error")

    row, column = node.start_point
    if node.is_missing:
        return FormatError(f"syntax error: missing {node.type!r}", row + 1, column + 1)

    snippet = data[node.start_byte : node.end_byte].decode("utf-8", "replace")
    near = snippet.strip().splitlines()[0] if snippet.strip() else ""
    return FormatError(f"syntax error near {near!r}", row + 1, column + 1)


def _first_error(node: Node) -> Optional[Node]:
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return None


class _Layout:
    """Lays out one parsed source file."""

    def __init__(self, root: Node, data: bytes):
        self.root = root
        self.data = data
        self.verbatim_spans = _multiline_spans(root)

    def render(self) -> str:
        lines: List[str] = []
        previous_row: Optional[int] = None
        seen_package = False

        for node in self.root.named_children:
            row, column = node.start_point

            if node.type not in TOP_LEVEL_NODES:
                raise FormatError(
                    "non-declaration statement outside function body",
                    row + 1,
                    column + 1,
                )

            if node.type == "package_clause":
                if seen_package:
                    raise FormatError("unexpected package clause", row + 1, column + 1)
                seen_package = True
            elif node.type != "comment" and not seen_package:
                raise FormatError(
                    f"expected 'package', found {node.type}", row + 1, column + 1
                )

            # gofmt keeps at most one blank line between declarations
            if previous_row is not None and row - previous_row > 1:
                lines.append("")

            lines.extend(self._declaration(node))
            previous_row = node.end_point[0]

        if not seen_package:
            raise FormatError("expected 'package', found EOF")

        return "\n".join(lines) + "\n"

    def _declaration(self, node: Node) -> List[str]:
        if node.type == "package_clause":
            return [f"package {self._text(node.named_children[-1])}"]

        if node.type == "type_declaration":
            lines = self._struct_declaration(node)
            if lines is not None:
                return lines

        if node.type in ("function_declaration", "method_declaration"):
            return self._function_declaration(node)

        return self._reindent(node.start_byte, node.end_byte)

    def _struct_declaration(self, node: Node) -> Optional[List[str]]:
        """Lay out ``type X struct {...}`` with aligned fields."""
        specs = [child for child in node.named_children if child.type != "comment"]
        if len(specs) != 1 or specs[0].type != "type_spec":
            return None

        spec = specs[0]
        struct = spec.child_by_field_name("type")
        if struct is None or struct.type != "struct_type":
            return None
        if spec.child_by_field_name("type_parameters") is not None:
            return None

        body = next(
            (c for c in struct.named_children if c.type == "field_declaration_list"),
            None,
        )
        if body is None:
            return None

        members = body.named_children
        if any(m.start_point[0] != m.end_point[0] for m in members):
            return None

        header = f"type {self._text(spec.child_by_field_name('name'))} struct"
        if not members and body.start_point[0] == body.end_point[0]:
            return [header + "{}"]

        # Blank lines split the fields into separately aligned sections
        sections: List[List[List[str]]] = [[]]
        previous_row: Optional[int] = None
        for member in members:
            row = member.start_point[0]
            if member.type == "comment" and row == previous_row and sections[-1]:
                sections[-1][-1].append(self._text(member))
                continue
            if previous_row is not None and row - previous_row > 1 and sections[-1]:
                sections.append([])
            sections[-1].append(self._field_cells(member))
            previous_row = member.end_point[0]

        lines = [header + " {"]
        for index, section in enumerate(s for s in sections if s):
            if index:
                lines.append("")
            lines.extend("\t" + line for line in _align(section))
        lines.append("}")
        return lines

    def _field_cells(self, member: Node) -> List[str]:
        if member.type == "comment":
            return [self._text(member)]

        names = [self._text(n) for n in member.children_by_field_name("name")]
        type_text = _squash(self._text(member.child_by_field_name("type")))

        cells = []
        if names:
            cells.append(", ".join(names))
        elif any(child.type == "*" for child in member.children):
            type_text = "*" + type_text
        cells.append(type_text)

        tag = member.child_by_field_name("tag")
        if tag is not None:
            cells.append(self._text(tag))
        return cells

    def _function_declaration(self, node: Node) -> List[str]:
        parts = ["func "]
        receiver = node.child_by_field_name("receiver")
        if receiver is not None:
            parts.append(_squash(self._text(receiver)) + " ")
        parts.append(self._text(node.child_by_field_name("name")))

        type_parameters = node.child_by_field_name("type_parameters")
        if type_parameters is not None:
            parts.append(_squash(self._text(type_parameters)))
        parts.append(_squash(self._text(node.child_by_field_name("parameters"))))

        result = node.child_by_field_name("result")
        if result is not None:
            parts.append(" " + _squash(self._text(result)))

        header = "".join(parts)
        body = node.child_by_field_name("body")
        if body is None:
            return [header]

        if body.start_point[0] == body.end_point[0]:
            inner = self._slice(body.start_byte + 1, body.end_byte - 1).strip()
            return [f"{header} {{ {inner} }}" if inner else f"{header} {{}}"]

        return [header + " {"] + self._reindent(body.start_byte + 1, body.end_byte)

    def _reindent(self, start: int, end: int) -> List[str]:
        """Re-emit a byte range line by line with tab indentation."""
        lines: List[_Line] = []
        position = start

        while True:
            newline = self.data.find(b"\n", position, end)
            line_end = end if newline == -1 else newline
            raw = self.data[position:line_end]

            if self._is_verbatim(position):
                lines.append([raw.decode("utf-8"), True, None])
            else:
                stripped = raw.strip()
                if stripped:
                    offset = position + len(raw) - len(raw.lstrip())
                    indent = "\t" * self._depth(offset)
                    keyed = self._keyed_element(offset, line_end)
                    lines.append([indent + stripped.decode("utf-8"), False, keyed])
                else:
                    lines.append(["", False, None])

            if newline == -1:
                break
            position = newline + 1

        _align_keyed(lines)
        return _tidy(lines)

    def _depth(self, offset: int) -> int:
        """
        Indentation depth of a line whose first token starts at offset.

        Enclosing nodes opened on the same row count once, so
        ``f(map[string]int{`` indents its content a single level. A line
        starting with a closing token drops the level its opener added.
        """
        node = self.root.descendant_for_byte_range(offset, offset + 1)
        rows: Set[int] = set()
        closing: Set[int] = set()

        while node is not None:
            delimiters = INDENTING_NODES.get(node.type)
            if delimiters is not None:
                opener, closer = _delimiters(node, *delimiters)
                if opener is not None:
                    row = opener.start_point[0]
                    if closer is not None and offset == closer.start_byte:
                        closing.add(row)
                    elif offset >= opener.end_byte and (
                        closer is None or offset < closer.start_byte
                    ):
                        rows.add(row)
            node = node.parent

        return len(rows - closing)

    def _keyed_element(
        self, offset: int, line_end: int
    ) -> Optional[Tuple[int, str, str]]:
        """Split a line holding exactly one single-line ``key: value`` element."""
        node = self.root.descendant_for_byte_range(offset, offset + 1)
        while node is not None and node.type != "keyed_element":
            if node.start_byte != offset:
                return None
            node = node.parent

        if node is None or node.start_byte != offset:
            return None
        if node.start_point[0] != node.end_point[0]:
            return None
        if node.parent is None or node.parent.type != "literal_value":
            return None

        tail = self._slice(node.end_byte, line_end).strip()
        colon = next((c for c in node.children if c.type == ":"), None)
        if tail not in ("", ",") or colon is None:
            return None

        key = self._text(node.named_children[0]) + ":"
        value = self._slice(colon.end_byte, node.end_byte).strip()
        return node.parent.start_byte, key, value + tail

    def _is_verbatim(self, position: int) -> bool:
        return any(start < position < end for start, end in self.verbatim_spans)

    def _text(self, node: Node) -> str:
        return self._slice(node.start_byte, node.end_byte)

    def _slice(self, start: int, end: int) -> str:
        return self.data[start:end].decode("utf-8")


def _delimiters(
    node: Node, open_token: str, close_token: Optional[str]
) -> Tuple[Optional[Node], Optional[Node]]:
    children = node.children
    opener = next((c for c in children if c.type == open_token), None)
    closer = None
    if close_token is not None:
        closer = next((c for c in reversed(children) if c.type == close_token), None)
    return opener, closer


def _multiline_spans(root: Node) -> List[Tuple[int, int]]:
    spans = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in _VERBATIM_NODES:
            if node.start_point[0] != node.end_point[0]:
                spans.append((node.start_byte, node.end_byte))
            continue
        stack.extend(node.children)
    return spans


def _align(rows: List[List[str]]) -> List[str]:
    """
    Align cells in columns like text/tabwriter with padding 1.

    A cell is padded only if it is not the last one on its line, and a
    column's width is taken over the run of adjacent lines that have a
    cell after it.
    """
    widths = [[0] * len(row) for row in rows]
    columns = max((len(row) for row in rows), default=0)

    for column in range(columns - 1):
        start = 0
        while start < len(rows):
            if len(rows[start]) <= column + 1:
                start += 1
                continue
            end = start
            while end < len(rows) and len(rows[end]) > column + 1:
                end += 1
            width = max(len(rows[i][column]) for i in range(start, end))
            for i in range(start, end):
                widths[i][column] = width
            start = end

    lines = []
    for row, row_widths in zip(rows, widths):
        cells = [cell.ljust(width) for cell, width in zip(row[:-1], row_widths)]
        lines.append(" ".join(cells + [row[-1]]))
    return lines


def _squash(text: str) -> str:
    """Put a signature or type expression on one line."""
    text = re.sub(r"\s+", " ", text.strip())
    text = re.sub(r"([(\[]) ", r"\1", text)
    text = re.sub(r" ([)\],])", r"\1", text)
    return re.sub(r",\)", ")", text)


def _tidy(lines: List[_Line]) -> List[str]:
    """Drop leading and trailing blank lines, collapse runs of blanks."""
    result: List[str] = []
    pending_blank = False
    for text, verbatim, _ in lines:
        if not text and not verbatim:
            pending_blank = bool(result)
            continue
        if pending_blank:
            result.append("")
        pending_blank = False
        result.append(text)
    return result


def _align_keyed(lines: List[_Line]) -> None:
    """
    Align the values of adjacent ``key: value`` lines of one literal.

    Alignment restarts at any other line, and where gofmt would break it
    because a key is much longer or shorter than the ones before it.
    """
    # literal id -> (sum of log key sizes, number of keys)
    sizes: Dict[int, Tuple[float, int]] = {}
    block: List[int] = []
    previous_literal: Optional[int] = None
    previous_size = 0

    for index, (_, _, keyed) in enumerate(lines):
        if keyed is None:
            _flush_keyed(lines, block)
            block = []
            previous_literal = None
            previous_size = 0
            continue

        literal, key, _ = keyed
        size = len(key) - 1
        if literal != previous_literal:
            previous_size = 0

        lnsum, count = sizes.get(literal, (0.0, 0))
        break_alignment = True
        if previous_size > 0:
            if count == 0 or (
                previous_size <= _SMALL_KEY_SIZE and size <= _SMALL_KEY_SIZE
            ):
                break_alignment = False
            else:
                ratio = size / math.exp(lnsum / count)
                break_alignment = (
                    _KEY_SIZE_RATIO * ratio <= 1 or _KEY_SIZE_RATIO <= ratio
                )

        if break_alignment:
            _flush_keyed(lines, block)
            block = []

        block.append(index)
        sizes[literal] = (lnsum + math.log(size), count + 1)
        previous_literal = literal
        previous_size = size

    _flush_keyed(lines, block)


def _flush_keyed(lines: List[_Line], block: List[int]) -> None:
    if not block:
        return
    width = max(len(lines[index][2][1]) for index in block)
    for index in block:
        text = lines[index][0]
        indent = text[: len(text) - len(text.lstrip("\t"))]
        _, key, value = lines[index][2]
        lines[index][0] = f"{indent}{key.ljust(width)} {value}"
