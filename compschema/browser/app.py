"""
Schema Browser - Textual TUI App

Read-only viewer for an emitted component_schema.json and, when present,
the component_enums.json written next to it.

Usage:
    compschema-browse out/component_schema.json
    compschema-browse out/component_schema.json --enums out/component_enums.json

Keys:
  a / c / e / s - switch tab (All, Custom, Enums, Summary)
  /             - filter entries by name
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Input, Static, TabbedContent, TabPane

from compschema.browser.widgets import CustomPanel, EntriesPanel, EnumsPanel, SummaryPanel
from compschema.errors import CompSchemaError, DescriptorError
from compschema.schema.emitter import ENUMS_FILENAME, load_schema

log = logging.getLogger("compschema.browser")


def load_enums(path: str | Path | None) -> dict[str, list[str]]:
    """Load an enums file. A missing file gives an empty catalog."""
    if path is None:
        return {}
    path = Path(path)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DescriptorError(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DescriptorError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DescriptorError(f"{path}: expected a JSON object of enum value lists")
    return data


class SchemaBrowser(App):
    """Component schema browser."""

    CSS = """
    #header-bar { height: 1; }
    #status-label { width: 1fr; }
    #filter { margin: 0 1; }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("a", "switch_tab('entries')", "All", show=True),
        Binding("c", "switch_tab('custom')", "Custom", show=True),
        Binding("e", "switch_tab('enums')", "Enums", show=True),
        Binding("s", "switch_tab('summary')", "Summary", show=True),
        Binding("slash", "focus_filter", "Filter"),
    ]

    def __init__(
        self,
        schema: list[dict],
        enums: dict[str, list[str]] | None = None,
        source_name: str = "",
    ):
        super().__init__()
        self.schema = schema
        self.enums = enums or {}
        self._source_name = source_name

    def compose(self) -> ComposeResult:
        with Horizontal(id="header-bar"):
            yield Static(self._header_text(), id="status-label")
        with TabbedContent(id="tabs"):
            with TabPane("All", id="entries"):
                yield Input(placeholder="filter by name", id="filter")
                yield EntriesPanel()
            with TabPane("Custom", id="custom"):
                yield CustomPanel()
            with TabPane("Enums", id="enums"):
                yield EnumsPanel()
            with TabPane("Summary", id="summary"):
                yield SummaryPanel()
        yield Footer()

    def on_mount(self) -> None:
        self.call_after_refresh(self._load_panels)

    def _load_panels(self) -> None:
        self.query_one(EntriesPanel).load(self.schema)
        self.query_one(CustomPanel).load(self.schema)
        self.query_one(EnumsPanel).load(self.enums)
        self.query_one(SummaryPanel).load(self.schema, self.enums)

    def _header_text(self) -> str:
        source = f" | {self._source_name}" if self._source_name else ""
        return f"CompSchema{source} | {len(self.schema)} entries | {len(self.enums)} enums"

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "filter":
            self.query_one(EntriesPanel).load(self.schema, filter_text=event.value.strip())

    # ---- Actions ----

    def action_switch_tab(self, tab_id: str) -> None:
        tabs: TabbedContent = self.query_one("#tabs", TabbedContent)
        tabs.active = tab_id

    def action_focus_filter(self) -> None:
        self.action_switch_tab("entries")
        self.query_one("#filter", Input).focus()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Component schema browser")
    parser.add_argument("schema", help="component_schema.json to browse")
    parser.add_argument("--enums", default=None,
                        help=f"Enum catalog (default: {ENUMS_FILENAME} next to the schema)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    schema_path = Path(args.schema)
    enums_path = Path(args.enums) if args.enums else schema_path.with_name(ENUMS_FILENAME)
    try:
        schema = load_schema(schema_path)
        enums = load_enums(enums_path)
    except CompSchemaError as e:
        log.error("%s", e)
        sys.exit(1)

    SchemaBrowser(schema, enums, source_name=schema_path.name).run()


if __name__ == "__main__":
    main()
