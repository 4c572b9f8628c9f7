"""Editor configurations for the job and purchase order screens."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from bizadmin.schemas.editor import Option
from .editor_config import Column, EditorConfig, FormLayout, LookupSource


def job_template() -> Dict[str, Any]:
    return {"job_category_id": 0, "name": "", "description": ""}


def purchase_template() -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "job_id": 0,
        "by_id": 0,
        "project_id": 0,
        "ref": "",
        "cost": 0,
        "contact": "",
        "create_at": now,
        "updated_at": now,
        "due_at": now,
    }


JOB_EDITOR = EditorConfig(
    entity="jobs",
    title="Job Management",
    table="job",
    template=job_template,
    searchable=("name", "description"),
    table_columns=(
        Column("code", "Job Code"),
        Column("name", "Job Name"),
        Column("description", "Description"),
        Column("job_category_id", "Category", lookup="categories"),
    ),
    list_fields=(
        Column("code", "Job Code"),
        Column("name", "Name"),
        Column("description", "Description"),
        Column("job_category_id", "Category", lookup="categories"),
    ),
    form=(
        FormLayout("Save Job")
        .text("name", "Job Name", placeholder="Job Name", required=True)
        .text("description", "Description", placeholder="Description")
        .dropdown(
            "job_category_id",
            "Job Category",
            options="categories",
            placeholder="Select Job Category",
            required=True,
        )
    ),
    add_label="Add Job",
    lookups=(LookupSource("categories", table="categ"),),
)

# Fixed project choices offered by the purchase form.
PROJECT_OPTIONS = (
    Option(value="1", label="Project1"),
    Option(value="2", label="Project2"),
    Option(value="3", label="Mile 3"),
    Option(value="4", label="Mile 4"),
    Option(value="5", label="Mile 5"),
)

# Both the "Company Name" input and the "Select Project" dropdown write by_id,
# and cost is labelled "Phone Number". Kept as shipped until product intent is confirmed.
PURCHASE_EDITOR = EditorConfig(
    entity="purchases",
    title="Purchase Order Management",
    table="purchase_order",
    template=purchase_template,
    searchable=("ref", "contact"),
    table_columns=(
        Column("code", "Code"),
        Column("contact", "Contact Person"),
        Column("by_id", "Company Name"),
        Column("cost", "Price"),
        Column("job_id", "Job"),
        Column("ref", "Ref"),
    ),
    list_fields=(
        Column("code", "Code"),
        Column("contact", "Contact Person"),
        Column("by_id", "Supplier Name"),
        Column("cost", "Price"),
        Column("job_id", "Job"),
    ),
    form=(
        FormLayout("Save purchase")
        .text("contact", "Contact Person", placeholder="Contact Person", required=True)
        .number("by_id", "Company Name", placeholder="Company Name", required=True)
        .dropdown(
            "by_id",
            "Select Project",
            options="projects",
            html_id="project",
            placeholder="Select Project",
            required=True,
        )
        .number("cost", "Phone Number", placeholder="Phone Number", required=True)
        .text("ref", "Reference", placeholder="Ref", required=True)
        .number("project_id", "Project ID", placeholder="Project", required=True)
        .text("job_id", "Job", placeholder="Job", required=True)
    ),
    add_label="Add purchase",
    static_options={"projects": PROJECT_OPTIONS},
)

EDITORS: Dict[str, EditorConfig] = {
    JOB_EDITOR.entity: JOB_EDITOR,
    PURCHASE_EDITOR.entity: PURCHASE_EDITOR,
}
