"""Which form fields land in top-level record columns, per entity type.

A field is looked up by its name first and then by its label, so admin fields
that reuse a standard label ("Job", "Organization") still reach the column.
Anything not listed here is a custom field.
"""

from dataclasses import dataclass
from enum import StrEnum

from staffdesk.core.modules.field.models import EntityType, FieldDefinition


class ColumnKind(StrEnum):
    TEXT = "text"
    INTEGER = "integer"  # Foreign keys; must be whole
    COUNT = "count"  # Truncated toward zero, so 12.5 employees is 12
    NUMBER = "number"
    DATE = "date"


@dataclass(frozen=True)
class Column:
    name: str
    kind: ColumnKind = ColumnKind.TEXT
    nullable: bool = False  # Blank is sent as null instead of being omitted


def _text(name: str) -> Column:
    return Column(name)


def _int(name: str) -> Column:
    return Column(name, ColumnKind.INTEGER, nullable=True)


def _count(name: str) -> Column:
    return Column(name, ColumnKind.COUNT, nullable=True)


def _number(name: str) -> Column:
    return Column(name, ColumnKind.NUMBER)


def _date(name: str) -> Column:
    return Column(name, ColumnKind.DATE, nullable=True)


def _table(*entries: tuple[str, str, Column]) -> dict[str, Column]:
    table: dict[str, Column] = {}
    for field_name, label, column in entries:
        table[field_name] = column
        table.setdefault(label, column)
    return table


_PERSON_COLUMNS = (
    ("firstName", "First Name", _text("first_name")),
    ("lastName", "Last Name", _text("last_name")),
    ("email", "Email", _text("email")),
    ("email2", "Email 2", _text("email2")),
    ("phone", "Phone", _text("phone")),
    ("mobilePhone", "Mobile Phone", _text("mobile_phone")),
    ("address", "Address", _text("address")),
    ("status", "Status", _text("status")),
    ("title", "Title", _text("title")),
    ("owner", "Owner", _text("owner")),
)

COLUMN_MAP: dict[EntityType, dict[str, Column]] = {
    EntityType.ORGANIZATIONS: _table(
        ("name", "Organization Name", _text("name")),
        ("nicknames", "Nicknames", _text("nicknames")),
        ("parentOrganization", "Parent Organization", _text("parent_organization")),
        ("website", "Website", _text("website")),
        ("status", "Status", _text("status")),
        ("contractOnFile", "Contract On File", _text("contract_on_file")),
        ("contractSignedBy", "Contract Signed By", _text("contract_signed_by")),
        ("dateContractSigned", "Date Contract Signed", _date("date_contract_signed")),
        ("yearFounded", "Year Founded", _text("year_founded")),
        ("overview", "Overview", _text("overview")),
        ("permFee", "Perm Fee (%)", _text("perm_fee")),
        ("numEmployees", "# of Employees", _count("num_employees")),
        ("numOffices", "# of Offices", _count("num_offices")),
        ("contactPhone", "Contact Phone", _text("contact_phone")),
        ("address", "Address", _text("address")),
    ),
    EntityType.JOBS: _table(
        ("jobTitle", "Job Title", _text("job_title")),
        ("category", "Category", _text("category")),
        ("organizationId", "Organization", _int("organization_id")),
        ("hiringManager", "Hiring Manager", _text("hiring_manager")),
        ("status", "Status", _text("status")),
        ("priority", "Priority", _text("priority")),
        ("employmentType", "Employment Type", _text("employment_type")),
        ("startDate", "Start Date", _date("start_date")),
        ("worksiteLocation", "Worksite Location", _text("worksite_location")),
        ("remoteOption", "Remote Option", _text("remote_option")),
        ("jobDescription", "Job Description", _text("job_description")),
        ("minSalary", "Minimum Salary", _number("min_salary")),
        ("maxSalary", "Maximum Salary", _number("max_salary")),
    ),
    EntityType.JOB_SEEKERS: _table(
        *_PERSON_COLUMNS,
        ("city", "City", _text("city")),
        ("state", "State", _text("state")),
        ("zip", "ZIP Code", _text("zip")),
        ("currentOrganization", "Current Organization", _text("current_organization")),
        ("resumeText", "Resume Text", _text("resume_text")),
        ("skills", "Skills", _text("skills")),
        ("desiredSalary", "Desired Salary", _text("desired_salary")),
        ("dateAdded", "Date Added", _date("date_added")),
        ("lastContactDate", "Last Contact Date", _date("last_contact_date")),
    ),
    EntityType.HIRING_MANAGERS: _table(
        *_PERSON_COLUMNS,
        ("nickname", "Nickname", _text("nickname")),
        ("organizationId", "Organization", _int("organization_id")),
        ("department", "Department", _text("department")),
        ("reportsTo", "Reports To", _text("reports_to")),
        ("directLine", "Direct Line", _text("direct_line")),
        ("linkedinUrl", "LinkedIn URL", _text("linkedin_url")),
    ),
    EntityType.PLACEMENTS: _table(
        ("jobSeekerId", "Job Seeker", _int("job_seeker_id")),
        ("jobId", "Job", _int("job_id")),
        ("organizationId", "Organization", _int("organization_id")),
        ("status", "Status", _text("status")),
        ("startDate", "Start Date", _date("start_date")),
        ("endDate", "End Date", _date("end_date")),
        ("salary", "Salary", _number("salary")),
        ("owner", "Owner", _text("owner")),
        ("internalEmailNotification", "Internal Email Notification", _text("internal_email_notification")),
    ),
    EntityType.LEADS: _table(
        *_PERSON_COLUMNS,
        ("organizationId", "Organization", _int("organization_id")),
        ("department", "Department", _text("department")),
        ("linkedinUrl", "LinkedIn URL", _text("linkedin_url")),
    ),
    EntityType.TASKS: _table(
        ("title", "Task Title", _text("title")),
        ("status", "Status", _text("status")),
        ("priority", "Priority", _text("priority")),
        ("type", "Type", _text("type")),
        ("assignedTo", "Assigned To", _text("assigned_to")),
        ("dueDate", "Due Date", _date("due_date")),
        ("description", "Description", _text("description")),
        ("notes", "Notes", _text("notes")),
        ("relatedEntity", "Related Entity", _text("related_entity")),
        ("relatedEntityId", "Related Entity ID", _int("related_entity_id")),
        ("dateAdded", "Date Added", _date("date_added")),
    ),
}


def column_for(entity_type: EntityType, field: FieldDefinition) -> Column | None:
    """The top-level column a field writes to, or None for a custom field."""
    table = COLUMN_MAP.get(entity_type, {})
    return table.get(field.field_name) or table.get(field.field_label)
