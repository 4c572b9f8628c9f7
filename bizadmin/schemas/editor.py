from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ViewMode = Literal["table", "list"]


class WsEnvelope(BaseModel):
    """Envelope for WebSocket messages."""
    type: str = Field(..., description="Message type (e.g., 'editor.view', 'search', 'submit').")
    payload: Dict[str, Any] = Field(default_factory=dict, description="Message payload.")
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="Timestamp (UTC).")
    channel: Optional[str] = Field(default=None, description="Editor entity the message belongs to.")


class Option(BaseModel):
    """Dropdown option; `value` keeps the backend's type."""
    model_config = ConfigDict(frozen=True)

    value: Any = Field(..., description="Option value written to the form field")
    label: str = Field(..., description="Display label")


# Presentational control props. `on_change` names the client message type the
# control emits with its new raw value.

class SearchBoxProps(BaseModel):
    """Props of the search box control."""
    search_term: str = Field("", description="Current (lower-cased) search term")
    on_change: str = Field("search", description="Message type emitted on change")


class InputProps(BaseModel):
    """Props of a text/number input."""
    id: str
    name: str
    type: str = Field("text", description="HTML input type")
    value: Any = None
    placeholder: Optional[str] = None
    required: bool = False
    autocomplete: str = "off"
    on_change: str = "field.change"


class DropdownProps(BaseModel):
    """Props of the dropdown control."""
    name: str
    value: Any = None
    options: List[Option] = Field(default_factory=list)
    placeholder: Optional[str] = None
    required: bool = False
    on_change: str = "select.change"


class FormFieldView(BaseModel):
    """One labelled control of the editor form."""
    label: str
    html_for: str
    input: Optional[InputProps] = None
    dropdown: Optional[DropdownProps] = None


class ModalView(BaseModel):
    """Editor overlay state."""
    open: bool = False
    mode: Literal["create", "edit"] = "create"
    editing_key: Any = None
    fields: List[FormFieldView] = Field(default_factory=list)
    submit_label: str = "Save"


class ColumnView(BaseModel):
    """Column (table mode) or labelled line (list mode)."""
    field: str
    header: str


class RowView(BaseModel):
    """Rendered record: display values keyed by field, labels already resolved."""
    key: Any
    cells: Dict[str, Any] = Field(default_factory=dict)


class EditorView(BaseModel):
    """Complete rendered state of a list editor."""
    entity: str
    title: str
    add_label: str
    view_mode: ViewMode
    body_classes: List[str] = Field(default_factory=list)
    search_box: SearchBoxProps
    columns: List[ColumnView] = Field(default_factory=list)
    rows: List[RowView] = Field(default_factory=list)
    modal: ModalView


# Client -> server payloads

class SearchPayload(BaseModel):
    term: str = ""


class OpenEditorPayload(BaseModel):
    code: Any = Field(None, description="Key of the record to edit; omit to create")


class FieldChangePayload(BaseModel):
    name: str
    value: Any = None


class DeletePayload(BaseModel):
    code: Any


class ResizePayload(BaseModel):
    width: int = Field(..., ge=0)
