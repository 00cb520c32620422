"""Header spellings spreadsheets commonly use for the standard fields.

Keyed by field name; every alias is compared lower-cased and trimmed. A
field's own label and name are always aliases too.
"""

from staffdesk.core.modules.field.models import FieldDefinition

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "firstName": ("first name", "first", "fname", "given name"),
    "lastName": ("last name", "last", "lname", "surname", "family name"),
    "email": ("email", "email address", "e-mail", "e-mail address", "primary email"),
    "email2": ("email 2", "secondary email", "alternate email"),
    "phone": ("phone", "phone number", "telephone", "work phone"),
    "mobilePhone": ("mobile phone", "mobile", "cell phone", "cell"),
    "directLine": ("direct line", "direct phone"),
    "contactPhone": ("contact phone", "main phone", "phone"),
    "address": ("address", "street address", "street"),
    "city": ("city", "town"),
    "state": ("state", "province", "region"),
    "zip": ("zip code", "zip", "postal code", "postcode"),
    "status": ("status", "current status"),
    "currentOrganization": ("current organization", "organization", "company", "current company", "employer"),
    "title": ("title", "job title", "position"),
    "resumeText": ("resume text", "resume", "cv"),
    "skills": ("skills", "skill set"),
    "desiredSalary": ("desired salary", "salary expectation", "expected salary"),
    "owner": ("owner", "record owner", "recruiter"),
    "dateAdded": ("date added", "created", "created date"),
    "lastContactDate": ("last contact date", "last contacted"),
    "name": ("organization name", "organization", "company name", "company", "name"),
    "nicknames": ("nicknames", "nickname", "aka"),
    "parentOrganization": ("parent organization", "parent company"),
    "website": ("website", "url", "web site", "homepage"),
    "overview": ("overview", "description", "about"),
    "numEmployees": ("# of employees", "number of employees", "employees", "headcount"),
    "numOffices": ("# of offices", "number of offices", "offices"),
    "yearFounded": ("year founded", "founded"),
    "jobTitle": ("job title", "title", "position"),
    "category": ("category", "job category"),
    "organizationId": ("organization id", "organization", "company id", "company"),
    "hiringManager": ("hiring manager", "manager"),
    "employmentType": ("employment type", "job type"),
    "startDate": ("start date", "start"),
    "endDate": ("end date", "end"),
    "worksiteLocation": ("worksite location", "location", "work location"),
    "remoteOption": ("remote option", "remote"),
    "jobDescription": ("job description", "description"),
    "minSalary": ("minimum salary", "min salary", "salary min"),
    "maxSalary": ("maximum salary", "max salary", "salary max"),
    "department": ("department", "dept"),
    "reportsTo": ("reports to", "manager"),
    "linkedinUrl": ("linkedin url", "linkedin", "linkedin profile"),
    "jobSeekerId": ("job seeker id", "job seeker", "candidate id", "candidate"),
    "jobId": ("job id", "job"),
    "salary": ("salary", "pay rate", "compensation"),
    "priority": ("priority",),
    "type": ("type", "task type"),
    "assignedTo": ("assigned to", "assignee"),
    "dueDate": ("due date", "due"),
    "description": ("description", "details"),
    "notes": ("notes", "comments"),
}


def normalize_header(header: str) -> str:
    return " ".join(header.strip().lower().split())


def aliases_for(field: FieldDefinition) -> list[str]:
    """Normalized aliases for a field: its label and name first, then the built-in list."""
    candidates = [field.field_label, field.field_name, *FIELD_ALIASES.get(field.field_name, ())]
    aliases: list[str] = []
    for candidate in candidates:
        normalized = normalize_header(candidate)
        if normalized and normalized not in aliases:
            aliases.append(normalized)
    return aliases
