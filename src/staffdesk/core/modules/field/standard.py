"""Built-in fields per entity type.

The registry appends them after the admin-defined fields of the same entity
type, so they also stand alone when the field store is unreachable or empty.
"""

from uuid import NAMESPACE_URL, uuid5

from staffdesk.core.modules.field.models import EntityType, FieldDefinition, FieldType

_Row = tuple[str, str, FieldType] | tuple[str, str, FieldType, dict[str, object]]

_STANDARD_FIELD_ROWS: dict[EntityType, list[_Row]] = {
    EntityType.ORGANIZATIONS: [
        ("name", "Organization Name", FieldType.TEXT, {"is_required": True}),
        ("nicknames", "Nicknames", FieldType.TEXT),
        ("parentOrganization", "Parent Organization", FieldType.TEXT),
        ("website", "Website", FieldType.URL, {"is_required": True}),
        ("status", "Status", FieldType.SELECT, {"options": ["Active", "Inactive", "Prospect"], "default_value": "Active"}),
        ("contractOnFile", "Contract On File", FieldType.SELECT, {"options": ["Yes", "No"], "default_value": "No"}),
        ("contractSignedBy", "Contract Signed By", FieldType.TEXT),
        ("dateContractSigned", "Date Contract Signed", FieldType.DATE),
        ("yearFounded", "Year Founded", FieldType.NUMBER),
        ("overview", "Overview", FieldType.TEXTAREA, {"is_required": True}),
        ("permFee", "Perm Fee (%)", FieldType.NUMBER),
        ("numEmployees", "# of Employees", FieldType.NUMBER),
        ("numOffices", "# of Offices", FieldType.NUMBER),
        ("contactPhone", "Contact Phone", FieldType.PHONE),
        ("address", "Address", FieldType.TEXT),
    ],
    EntityType.JOBS: [
        ("jobTitle", "Job Title", FieldType.TEXT, {"is_required": True}),
        (
            "category",
            "Category",
            FieldType.SELECT,
            {"options": ["Payroll", "IT", "Finance", "Marketing", "Human Resources", "Operations", "Sales"]},
        ),
        ("organizationId", "Organization", FieldType.TEXT),
        ("hiringManager", "Hiring Manager", FieldType.TEXT),
        ("status", "Status", FieldType.SELECT, {"options": ["Open", "On Hold", "Filled", "Closed"], "default_value": "Open"}),
        ("priority", "Priority", FieldType.SELECT, {"options": ["A", "B", "C"], "default_value": "A"}),
        (
            "employmentType",
            "Employment Type",
            FieldType.SELECT,
            {"options": ["Full-time", "Part-time", "Contract", "Temp to Hire", "Temporary", "Internship"]},
        ),
        ("startDate", "Start Date", FieldType.DATE),
        ("worksiteLocation", "Worksite Location", FieldType.TEXT, {"placeholder": "Address, City, State, Zip"}),
        ("remoteOption", "Remote Option", FieldType.SELECT, {"options": ["On-site", "Remote", "Hybrid"]}),
        ("jobDescription", "Job Description", FieldType.TEXTAREA),
        ("jobDescriptionFile", "Upload Job Description", FieldType.FILE),
        ("minSalary", "Minimum Salary", FieldType.NUMBER),
        ("maxSalary", "Maximum Salary", FieldType.NUMBER),
    ],
    EntityType.JOB_SEEKERS: [
        ("firstName", "First Name", FieldType.TEXT, {"is_required": True}),
        ("lastName", "Last Name", FieldType.TEXT, {"is_required": True}),
        ("email", "Email", FieldType.EMAIL, {"is_required": True}),
        ("phone", "Phone", FieldType.PHONE),
        ("mobilePhone", "Mobile Phone", FieldType.PHONE),
        ("address", "Address", FieldType.TEXT),
        ("city", "City", FieldType.TEXT),
        ("state", "State", FieldType.TEXT),
        ("zip", "ZIP Code", FieldType.TEXT),
        ("status", "Status", FieldType.SELECT, {"options": ["New lead", "Active", "Placed", "Inactive"]}),
        ("currentOrganization", "Current Organization", FieldType.TEXT),
        ("title", "Title", FieldType.TEXT),
        ("resumeText", "Resume Text", FieldType.TEXTAREA),
        ("resumeUpload", "Upload Resume", FieldType.FILE),
        ("skills", "Skills", FieldType.TEXTAREA),
        ("desiredSalary", "Desired Salary", FieldType.TEXT),
        ("owner", "Owner", FieldType.TEXT),
        ("dateAdded", "Date Added", FieldType.DATE),
        ("lastContactDate", "Last Contact Date", FieldType.DATE),
    ],
    EntityType.HIRING_MANAGERS: [
        ("firstName", "First Name", FieldType.TEXT, {"is_required": True}),
        ("lastName", "Last Name", FieldType.TEXT, {"is_required": True}),
        ("status", "Status", FieldType.SELECT, {"options": ["Active", "Inactive"], "default_value": "Active"}),
        ("nickname", "Nickname", FieldType.TEXT),
        ("title", "Title", FieldType.TEXT),
        ("organizationId", "Organization", FieldType.TEXT),
        ("department", "Department", FieldType.TEXT),
        ("reportsTo", "Reports To", FieldType.TEXT),
        ("owner", "Owner", FieldType.TEXT),
        ("email", "Email", FieldType.EMAIL),
        ("email2", "Email 2", FieldType.EMAIL),
        ("phone", "Phone", FieldType.PHONE),
        ("mobilePhone", "Mobile Phone", FieldType.PHONE),
        ("directLine", "Direct Line", FieldType.PHONE),
        ("linkedinUrl", "LinkedIn URL", FieldType.URL),
        ("address", "Address", FieldType.TEXT),
    ],
    EntityType.PLACEMENTS: [
        ("jobSeekerId", "Job Seeker", FieldType.TEXT, {"is_required": True}),
        ("jobId", "Job", FieldType.TEXT, {"is_required": True}),
        ("organizationId", "Organization", FieldType.TEXT),
        ("status", "Status", FieldType.SELECT, {"options": ["Active", "Pending", "Completed"], "default_value": "Active"}),
        ("startDate", "Start Date", FieldType.DATE, {"is_required": True}),
        ("endDate", "End Date", FieldType.DATE),
        ("salary", "Salary", FieldType.NUMBER),
        ("owner", "Owner", FieldType.TEXT),
        ("internalEmailNotification", "Internal Email Notification", FieldType.EMAIL),
    ],
    EntityType.LEADS: [
        ("firstName", "First Name", FieldType.TEXT, {"is_required": True}),
        ("lastName", "Last Name", FieldType.TEXT, {"is_required": True}),
        ("status", "Status", FieldType.SELECT, {"options": ["New Lead", "Contacted", "Qualified", "Lost"]}),
        ("title", "Title", FieldType.TEXT),
        ("organizationId", "Organization", FieldType.TEXT),
        ("department", "Department", FieldType.TEXT),
        ("owner", "Owner", FieldType.TEXT),
        ("email", "Email", FieldType.EMAIL, {"is_required": True}),
        ("email2", "Email 2", FieldType.EMAIL),
        ("phone", "Phone", FieldType.PHONE),
        ("mobilePhone", "Mobile Phone", FieldType.PHONE),
        ("linkedinUrl", "LinkedIn URL", FieldType.URL),
        ("address", "Address", FieldType.TEXT),
    ],
    EntityType.TASKS: [
        ("title", "Task Title", FieldType.TEXT, {"is_required": True}),
        (
            "status",
            "Status",
            FieldType.SELECT,
            {"is_required": True, "options": ["Open", "In Progress", "Completed", "On Hold", "Cancelled"], "default_value": "Open"},
        ),
        (
            "priority",
            "Priority",
            FieldType.SELECT,
            {"is_required": True, "options": ["High", "Medium", "Low"], "default_value": "Medium"},
        ),
        (
            "type",
            "Type",
            FieldType.SELECT,
            {"options": ["Follow-up", "Email", "Call", "Meeting", "Research", "Other"], "default_value": "Follow-up"},
        ),
        ("assignedTo", "Assigned To", FieldType.TEXT),
        ("dueDate", "Due Date", FieldType.DATE),
        ("description", "Description", FieldType.TEXTAREA),
        ("notes", "Notes", FieldType.TEXTAREA),
        ("relatedEntity", "Related Entity", FieldType.TEXT),
        ("relatedEntityId", "Related Entity ID", FieldType.TEXT),
        ("dateAdded", "Date Added", FieldType.DATE),
    ],
}


def _build(entity_type: EntityType, index: int, row: _Row) -> FieldDefinition:
    field_name, field_label, field_type = row[0], row[1], row[2]
    extra = row[3] if len(row) == 4 else {}  # noqa: PLR2004
    return FieldDefinition.model_validate(
        {
            "id": uuid5(NAMESPACE_URL, f"staffdesk:{entity_type.value}:{field_name}"),
            "entity_type": entity_type,
            "field_name": field_name,
            "field_label": field_label,
            "field_type": field_type,
            "sort_order": index * 10,
            **extra,
        }
    )


def get_standard_fields(entity_type: EntityType) -> list[FieldDefinition]:
    """Return fresh copies of the built-in fields for an entity type."""
    return [_build(entity_type, i, row) for i, row in enumerate(_STANDARD_FIELD_ROWS.get(entity_type, []))]
