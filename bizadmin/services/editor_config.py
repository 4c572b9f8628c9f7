"""
Declarative configuration of a list editor.

An `EditorConfig` names the backing table, the zero-value form template, the
searchable fields, how rows are laid out in table and list mode, which lookup
tables resolve foreign keys to labels, and the form layout built with
`FormLayout`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from bizadmin.schemas.editor import Option

ControlKind = Literal["input", "dropdown"]


@dataclass(frozen=True)
class FieldLayout:
    """One control of the editor form."""
    name: str
    label: str
    control: ControlKind = "input"
    input_type: str = "text"
    html_id: Optional[str] = None
    placeholder: Optional[str] = None
    required: bool = False
    options: Optional[str] = None

    @property
    def id(self) -> str:
        return self.html_id or self.name


class FormLayout:
    """
    Fluent builder for an editor form.

    Example:
        FormLayout("Save Job").text("name", "Job Name", required=True).build()
    """

    def __init__(self, submit_label: str = "Save") -> None:
        self.submit_label = submit_label
        self._fields: List[FieldLayout] = []

    def text(self, name: str, label: str, **kwargs: Any) -> "FormLayout":
        self._fields.append(FieldLayout(name=name, label=label, input_type="text", **kwargs))
        return self

    def number(self, name: str, label: str, **kwargs: Any) -> "FormLayout":
        self._fields.append(FieldLayout(name=name, label=label, input_type="number", **kwargs))
        return self

    def dropdown(self, name: str, label: str, *, options: str, **kwargs: Any) -> "FormLayout":
        self._fields.append(
            FieldLayout(name=name, label=label, control="dropdown", options=options, **kwargs)
        )
        return self

    def build(self) -> Tuple[FieldLayout, ...]:
        return tuple(self._fields)


@dataclass(frozen=True)
class Column:
    """A displayed field; `lookup` names the option set used to resolve its label."""
    field: str
    header: str
    lookup: Optional[str] = None


@dataclass(frozen=True)
class LookupSource:
    """Secondary table fetched once per editor to build an option set."""
    name: str
    table: str
    value_column: str = "code"
    label_column: str = "name"


@dataclass(frozen=True)
class EditorConfig:
    entity: str
    title: str
    table: str
    template: Callable[[], Dict[str, Any]]
    searchable: Tuple[str, ...]
    table_columns: Tuple[Column, ...]
    list_fields: Tuple[Column, ...]
    form: FormLayout
    add_label: str = "Add"
    key: str = "code"
    lookups: Tuple[LookupSource, ...] = ()
    static_options: Mapping[str, Sequence[Option]] = field(default_factory=dict)

    def columns_for(self, view_mode: str) -> Tuple[Column, ...]:
        return self.list_fields if view_mode == "list" else self.table_columns
