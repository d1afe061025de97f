"""
Schema Browser - Panel Widgets

Four panels:
1. EntriesPanel  - every schema entry with its wire layout
2. CustomPanel   - entries that need hand-written codecs
3. EnumsPanel    - the Enum Catalog
4. SummaryPanel  - pattern counts and follow-ups
"""

from __future__ import annotations

from collections import Counter

from rich.text import Text
from textual.containers import Vertical
from textual.widgets import DataTable, Static

from compschema.schema.entry import Pattern

_PATTERN_COLORS: dict[str, str] = {
    Pattern.EMPTY: "bright_black",
    Pattern.EMBED: "green",
    Pattern.EITHER_HOLDER: "cyan",
    Pattern.ARRAY: "blue",
    Pattern.TUPLE: "magenta",
    Pattern.CUSTOM: "bold red",
}

ENTRY_COLUMNS = ("Name", "Pattern", "Layout")
CUSTOM_COLUMNS = ("Name",)
ENUM_COLUMNS = ("Enum", "Count", "Values")


def layout_text(entry: dict) -> str:
    """One-line rendering of an entry's payload."""
    match entry.get("pattern"):
        case Pattern.EMBED:
            return entry.get("embedType", "?")
        case Pattern.ARRAY:
            return f"{entry.get('fieldName', '?')}: array[{entry.get('elementType', '?')}]"
        case Pattern.TUPLE:
            return ", ".join(f"{f['name']}: {f['type']}" for f in entry.get("fields", []))
        case _:
            return "-"


def pattern_text(pattern: str) -> Text:
    return Text(pattern, style=_PATTERN_COLORS.get(pattern, "white"))


def custom_entries(schema: list[dict]) -> list[dict]:
    return [e for e in schema if e.get("pattern") == Pattern.CUSTOM]


def unverified_entries(schema: list[dict]) -> list[dict]:
    return [e for e in schema if e.get("unverified")]


def _ensure_columns(table: DataTable, *labels: str) -> None:
    if not table.columns:
        table.add_columns(*labels)


def summary_lines(schema: list[dict], enums: dict[str, list[str]]) -> list[str]:
    counts = Counter(e.get("pattern", "?") for e in schema)
    lines = [f"Entries: {len(schema)}", ""]
    for pattern in Pattern.ALL:
        lines.append(f"  {pattern + ':':<14s}{counts.get(pattern, 0)}")
    extra = sorted(p for p in counts if p not in Pattern.ALL)
    for pattern in extra:
        lines.append(f"  {pattern + ':':<14s}{counts[pattern]} (unknown pattern)")
    lines.append("")
    lines.append(f"Enums: {len(enums)}")
    unverified = unverified_entries(schema)
    if unverified:
        lines.append("")
        lines.append("Unverified integer framing:")
        lines.extend(f"  - {e['name']}" for e in unverified)
    return lines


# ---- 1. Entries Panel ----

class EntriesPanel(Vertical):
    """All schema entries."""

    def compose(self):
        yield Static("", id="entries-count")
        table = DataTable(id="entries-table")
        table.cursor_type = "row"
        yield table

    def on_mount(self) -> None:
        table: DataTable = self.query_one("#entries-table", DataTable)
        _ensure_columns(table, *ENTRY_COLUMNS)

    def load(self, schema: list[dict], filter_text: str = "") -> None:
        table: DataTable = self.query_one("#entries-table", DataTable)
        _ensure_columns(table, *ENTRY_COLUMNS)
        count: Static = self.query_one("#entries-count", Static)
        table.clear()

        needle = filter_text.lower()
        shown = 0
        for entry in schema:
            name = entry.get("name", "?")
            if needle and needle not in name.lower():
                continue
            layout = Text(layout_text(entry))
            if entry.get("unverified"):
                layout.append(" (unverified)", style="yellow")
            table.add_row(Text(name), pattern_text(entry.get("pattern", "?")), layout, key=name)
            shown += 1

        suffix = f" matching '{filter_text}'" if filter_text else ""
        count.update(f" {shown} of {len(schema)} entries{suffix}")


# ---- 2. Custom Panel ----

class CustomPanel(Vertical):
    """Entries that need hand-written codecs."""

    def compose(self):
        yield Static("", id="custom-count")
        table = DataTable(id="custom-table")
        table.cursor_type = "row"
        yield table

    def on_mount(self) -> None:
        table: DataTable = self.query_one("#custom-table", DataTable)
        _ensure_columns(table, *CUSTOM_COLUMNS)

    def load(self, schema: list[dict]) -> None:
        table: DataTable = self.query_one("#custom-table", DataTable)
        _ensure_columns(table, *CUSTOM_COLUMNS)
        count: Static = self.query_one("#custom-count", Static)
        table.clear()
        custom = custom_entries(schema)
        for entry in custom:
            table.add_row(Text(entry["name"], style="red"), key=entry["name"])
        count.update(f" {len(custom)} custom components need hand-written codecs")


# ---- 3. Enums Panel ----

class EnumsPanel(Vertical):
    """Enum Catalog: identity, value count, values in ordinal order."""

    def compose(self):
        table = DataTable(id="enums-table")
        table.cursor_type = "row"
        yield table

    def on_mount(self) -> None:
        table: DataTable = self.query_one("#enums-table", DataTable)
        _ensure_columns(table, *ENUM_COLUMNS)

    def load(self, enums: dict[str, list[str]]) -> None:
        table: DataTable = self.query_one("#enums-table", DataTable)
        _ensure_columns(table, *ENUM_COLUMNS)
        table.clear()
        for key, values in enums.items():
            table.add_row(
                Text(key, style="bold"),
                Text(str(len(values))),
                Text(", ".join(values), style="bright_black"),
                key=key,
            )


# ---- 4. Summary Panel ----

class SummaryPanel(Vertical):
    def compose(self):
        yield Static("", id="summary-text")

    def load(self, schema: list[dict], enums: dict[str, list[str]]) -> None:
        summary: Static = self.query_one("#summary-text", Static)
        summary.update("\n".join(summary_lines(schema, enums)))
