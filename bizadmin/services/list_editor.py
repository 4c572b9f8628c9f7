from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from bizadmin.schemas.editor import (
    ColumnView,
    DropdownProps,
    EditorView,
    FormFieldView,
    InputProps,
    ModalView,
    Option,
    RowView,
    SearchBoxProps,
    ViewMode,
)
from .data_service import DataService, DataServiceError, Row
from .document import DocumentBody, ScrollLock
from .editor_config import Column, EditorConfig, FieldLayout, LookupSource
from .search import filter_rows, resolve_label
from .viewport import ViewportObserver

logger = logging.getLogger(__name__)


class ListEditor:
    """
    Generic list editor over one backend table.

    Holds the fetched rows, the draft form, create/edit mode, modal visibility,
    the search term, the viewport-derived view mode and the lookup option sets.
    Backend failures are logged and leave state untouched; nothing is raised
    to the caller.

    Lifecycle:
        editor = ListEditor(config, data_service, viewport)
        await editor.load()
        ...
        editor.dispose()

    or `async with ListEditor(...) as editor:` which loads on entry and
    disposes on exit. Responses arriving after `dispose` are ignored.
    """

    def __init__(
        self,
        config: EditorConfig,
        data_service: DataService,
        viewport: ViewportObserver,
        body: Optional[DocumentBody] = None,
    ) -> None:
        self.config = config
        self._data = data_service
        self.entities: List[Row] = []
        self.form_data: Dict[str, Any] = config.template()
        self.editing_key: Any = None
        self.is_modal_open = False
        self.search_term = ""
        self.view_mode: ViewMode = viewport.view_mode
        self.lookup_options: Dict[str, List[Option]] = {
            name: list(options) for name, options in config.static_options.items()
        }
        self._scroll_lock = ScrollLock(body)
        self._unsubscribe = viewport.subscribe(self._on_view_mode)
        self._disposed = False

    async def __aenter__(self) -> "ListEditor":
        await self.load()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def body(self) -> DocumentBody:
        return self._scroll_lock.body

    def _on_view_mode(self, mode: ViewMode) -> None:
        self.view_mode = mode

    # PUBLIC_INTERFACE
    def dispose(self) -> None:
        """Tear down: drop the viewport subscription and the scroll lock."""
        if self._disposed:
            return
        self._disposed = True
        self._unsubscribe()
        self._scroll_lock.release()

    # Loading

    # PUBLIC_INTERFACE
    async def load(self) -> None:
        """Fetch the rows and every lookup option set concurrently."""
        await asyncio.gather(
            self.reload(),
            *(self._load_lookup(source) for source in self.config.lookups),
        )

    # PUBLIC_INTERFACE
    async def reload(self) -> bool:
        """Replace `entities` with a fresh fetch; keep the old rows on failure."""
        try:
            rows = await self._data.select_all(self.config.table)
        except DataServiceError:
            logger.exception("Error fetching %s", self.config.entity)
            return False
        if self._disposed:
            logger.debug("Discarding %s rows fetched after dispose", self.config.entity)
            return False
        self.entities = rows
        return True

    async def _load_lookup(self, source: LookupSource) -> None:
        try:
            rows = await self._data.select_all(source.table)
        except DataServiceError:
            logger.exception("Error fetching %s", source.name)
            return
        if self._disposed:
            return
        self.lookup_options[source.name] = [
            Option(value=row.get(source.value_column), label=str(row.get(source.label_column) or ""))
            for row in rows
        ]
        logger.info("Fetched %d %s options", len(rows), source.name)

    # Search

    def search(self, term: Optional[str]) -> None:
        self.search_term = (term or "").lower()

    @property
    def visible_entities(self) -> List[Row]:
        return filter_rows(self.entities, self.config.searchable, self.search_term)

    # Editor

    def find(self, key: Any) -> Optional[Row]:
        for row in self.entities:
            if row.get(self.config.key) == key:
                return row
        return None

    def _reset_form(self) -> None:
        self.form_data = self.config.template()
        self.editing_key = None

    def _open(self) -> None:
        self.is_modal_open = True
        self._scroll_lock.acquire()

    # PUBLIC_INTERFACE
    def open_create(self) -> None:
        """Open the editor on a fresh template in create mode."""
        self._reset_form()
        self._open()

    # PUBLIC_INTERFACE
    def open_edit(self, record: Row) -> None:
        """Open the editor on a copy of `record` without its key."""
        key = self.config.key
        self.form_data = {name: value for name, value in record.items() if name != key}
        self.editing_key = record.get(key)
        self._open()

    # PUBLIC_INTERFACE
    def close(self) -> None:
        """Discard the draft and close the editor."""
        self._reset_form()
        self.is_modal_open = False
        self._scroll_lock.release()

    def change_field(self, name: str, value: Any) -> None:
        """Merge a raw input value into the draft; no coercion. The key is never editable."""
        if name == self.config.key:
            logger.warning("Ignoring change to key field %r of %s", name, self.config.entity)
            return
        self.form_data[name] = value

    def change_select(self, name: str, value: Any) -> None:
        """Merge a dropdown value into the draft; same semantics as `change_field`."""
        self.change_field(name, value)

    # Writes

    # PUBLIC_INTERFACE
    async def submit(self) -> bool:
        """
        Update the edited row (or insert a new one) with the whole draft.

        On success the list is reloaded and the editor closed. On failure the
        editor stays open with the draft intact. Returns whether the write succeeded.
        """
        payload = {name: value for name, value in self.form_data.items() if name != self.config.key}
        key = self.editing_key
        try:
            if key is not None:
                await self._data.update(self.config.table, payload, self.config.key, key)
            else:
                await self._data.insert(self.config.table, payload)
        except DataServiceError:
            logger.exception("Error saving %s", self.config.entity)
            return False
        if self._disposed:
            return True
        await self.reload()
        self.close()
        return True

    # PUBLIC_INTERFACE
    async def delete(self, key: Any) -> bool:
        """Delete the row with `key` and reload the list on success."""
        try:
            await self._data.delete(self.config.table, self.config.key, key)
        except DataServiceError:
            logger.exception("Error deleting %s %s", self.config.entity, key)
            return False
        if not self._disposed:
            await self.reload()
        return True

    # Rendering

    def display_value(self, row: Row, column: Column) -> Any:
        value = row.get(column.field)
        if column.lookup is None:
            return value
        return resolve_label(value, self.lookup_options.get(column.lookup, ()))

    def _field_view(self, layout: FieldLayout) -> FormFieldView:
        value = self.form_data.get(layout.name)
        if layout.control == "dropdown":
            return FormFieldView(
                label=layout.label,
                html_for=layout.id,
                dropdown=DropdownProps(
                    name=layout.name,
                    value=value,
                    options=self.lookup_options.get(layout.options or "", []),
                    placeholder=layout.placeholder,
                    required=layout.required,
                ),
            )
        return FormFieldView(
            label=layout.label,
            html_for=layout.id,
            input=InputProps(
                id=layout.id,
                name=layout.name,
                type=layout.input_type,
                value=value,
                placeholder=layout.placeholder,
                required=layout.required,
            ),
        )

    # PUBLIC_INTERFACE
    def render(self) -> EditorView:
        """Build the complete view of the current state."""
        columns = self.config.columns_for(self.view_mode)
        return EditorView(
            entity=self.config.entity,
            title=self.config.title,
            add_label=self.config.add_label,
            view_mode=self.view_mode,
            body_classes=self.body.classes,
            search_box=SearchBoxProps(search_term=self.search_term),
            columns=[ColumnView(field=c.field, header=c.header) for c in columns],
            rows=[
                RowView(
                    key=row.get(self.config.key),
                    cells={c.field: self.display_value(row, c) for c in columns},
                )
                for row in self.visible_entities
            ],
            modal=ModalView(
                open=self.is_modal_open,
                mode="edit" if self.editing_key is not None else "create",
                editing_key=self.editing_key,
                fields=[self._field_view(f) for f in self.config.form.build()],
                submit_label=self.config.form.submit_label,
            ),
        )
