"""
Smartschool Operation Table

Explicit declaration of every Smartschool operation exposed as a tool:
its parameter schema (JSON Schema), the field that identifies a person
(subject to 'First Last' -> 'first.last' normalization), the context
shown to the agent and any result enrichers.

The confirmation marker is never declared here; the catalog adds it to
the advertised schema when the policy requires it.
"""

from __future__ import annotations

from typing import Any

from schoolgate.domain.conventions import (
    ABSENCE_CODES,
    CLASS_CODE_EXAMPLES,
    CLASS_CODE_EXPLANATION,
    annotate_absence_codes,
    format_absence_codes,
    format_co_account_types,
    format_user_roles,
)
from schoolgate.tools.models import OperationContext, OperationSpec

USER_IDENTIFIER = "userIdentifier"


# ─── Schema building blocks ──────────────────────────────────

def _string(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def _number(description: str) -> dict[str, Any]:
    return {"type": "number", "description": description}


def _boolean(description: str) -> dict[str, Any]:
    return {"type": "boolean", "description": description}


def _object(required: dict[str, dict] | None = None, optional: dict[str, dict] | None = None) -> dict:
    properties = {**(required or {}), **(optional or {})}
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


_USER_ID = _string(
    "User identifier. Can be:\n"
    "- Username (e.g., 'john.doe' for John Doe)\n"
    "- Internal number (e.g., '12345')\n"
    "- Student ID\n"
    "Note: Usernames typically follow 'firstname.lastname' pattern in lowercase."
)
_CLASS_CODE = _string(
    "Class or group code. Examples:\n"
    "- Grade-based: '1A', '2B', '3C'\n"
    "- Descriptive: 'STEM-GROUP-1', 'CHESS-CLUB'\n"
    "- Year-specific: '6WEWE-2024'"
)
_DATE = _string("Date in YYYY-MM-DD format (e.g., '2024-12-15')")
_SCHOOL_YEAR = _string("School year as starting year (e.g., '2024' for school year 2024-2025)")
_OFFICIAL_DATE = _string(
    "Official date for the action (YYYY-MM-DD format). "
    "If not provided, may require manual confirmation in Smartschool."
)
_ROLE = {
    "type": "string",
    "enum": ["leerling", "leerkracht", "directie", "andere"],
    "description": f"User role in school:\n{format_user_roles()}",
}
_ACCOUNT_TYPE = {
    "type": "integer",
    "minimum": 0,
    "maximum": 6,
    "description": f"Co-account type:\n{format_co_account_types()}",
}
_COURSE_NAME = _string("Full name of the course")
_COURSE_DESC = _string("Unique course code identifier")


def _with_class_desc(description: str) -> dict[str, Any]:
    return {**_CLASS_CODE, "description": description}


_ABSENCE_CONTEXT = (
    "Returns absence data with codes for morning (am) and afternoon (pm).\n\n"
    f"Absence codes mean:\n{format_absence_codes()}\n\n"
    'Example response: {"2024-09-01": {"am": "|", "pm": "Z"}} means present '
    "in morning, sick in afternoon."
)
_ABSENCE_SHORT_CONTEXT = (
    "Shows all students' attendance for one date with absence codes. "
    + ", ".join(
        f"'{code}' = {desc.split(' - ')[0]}" for code, desc in list(ABSENCE_CODES.items())[:5]
    )
    + ", etc."
)


# ─── Context blocks ──────────────────────────────────────────

_CONTEXTS: dict[str, OperationContext] = {
    "saveUser": OperationContext(
        description="Create or update a user account (student, teacher, staff)",
        use_case="When you need to add new students/teachers or update existing user information",
        category="User Management",
        examples=["Add a new student to the school", "Update a teacher's email address"],
        domain_context=(
            "Creates usernames from names automatically (e.g., 'John Doe' becomes 'john.doe').\n\n"
            f"User roles:\n{format_user_roles()}\n\n"
            "For new users, username is typically generated as 'firstname.lastname' in lowercase."
        ),
    ),
    "getUserDetails": OperationContext(
        description="Get comprehensive user information including profile, groups, and co-accounts",
        use_case="When you need to look up detailed information about a person",
        category="User Information",
        examples=["Find a student's contact details", "Check which classes a teacher belongs to"],
        domain_context=(
            "Returns extensive user data including all co-accounts (parent/guardian accounts). "
            "If you only have a name like 'John Doe', the userIdentifier is typically 'john.doe'."
        ),
    ),
    "getUserDetailsByUsername": OperationContext(
        description="Look up user details using their username",
        use_case="When you only know someone's username but need their full profile",
        category="User Information",
        examples=["Find user info for 'john.doe'"],
        domain_context=(
            "Usernames in Smartschool typically follow the pattern 'firstname.lastname' "
            "(e.g., 'john.doe' for John Doe)."
        ),
    ),
    "getUserDetailsByNumber": OperationContext(
        description="Look up user details using their internal number",
        use_case="When you have an internal ID and need user information",
        category="User Information",
        examples=["Get details for student #12345"],
    ),
    "delUser": OperationContext(
        description="Remove a user from the system permanently",
        use_case="When a student graduates or staff member leaves",
        category="User Management",
        examples=["Remove graduated student", "Delete former teacher account"],
    ),
    "saveClass": OperationContext(
        description="Create or update a class/group in the school",
        use_case="When setting up new academic years or reorganizing classes",
        category="Class Management",
        examples=["Create new '6A' class", "Update class description"],
    ),
    "saveGroup": OperationContext(
        description="Create or update student/teacher groups",
        use_case="For organizing extracurricular activities or special groups",
        category="Group Management",
        examples=["Create 'Chess Club' group", "Set up 'Math Tutoring' group"],
    ),
    "saveUserToClass": OperationContext(
        description="Assign a student to a specific class",
        use_case="When enrolling students or moving them between classes",
        category="Class Assignment",
        examples=["Move student to class 5B", "Assign new student to 1A"],
    ),
    "getClassTeachers": OperationContext(
        description="Find out which teachers are assigned to which classes",
        use_case="To see class-teacher assignments and responsibilities",
        category="Class Information",
        examples=["Who teaches class 3A?", "Get all class assignments"],
    ),
    "delClass": OperationContext(
        description="Remove a class or group from the system",
        use_case="When classes are no longer needed or reorganizing",
        category="Class Management",
        examples=["Delete old graduation class", "Remove unused group"],
    ),
    "sendMsg": OperationContext(
        description="Send messages to users (students, parents, teachers)",
        use_case="For school communications and notifications",
        category="Communication",
        examples=[
            "Send homework reminder",
            "Notify parents about event",
            "Message teacher about meeting",
        ],
        domain_context=(
            "Can send to main accounts or co-accounts (parent/guardian accounts).\n\n"
            f"Co-account types:\n{format_co_account_types()}\n\n"
            "Use coaccount=0 for main account (student/teacher), coaccount=1 for first parent, etc."
        ),
    ),
    "getAbsents": OperationContext(
        description="Get student absence records for a school year",
        use_case="To track attendance and identify patterns",
        category="Attendance",
        examples=["Check John's absences this year", "Generate attendance report"],
        domain_context=_ABSENCE_CONTEXT,
    ),
    "getAbsentsByDate": OperationContext(
        description="See who was absent on a specific date",
        use_case="To check daily attendance or investigate specific days",
        category="Attendance",
        examples=["Who was absent yesterday?", "Check attendance for Dec 15th"],
        domain_context=_ABSENCE_SHORT_CONTEXT,
    ),
    "setAccountStatus": OperationContext(
        description="Change user account status (active, inactive, temporary)",
        use_case="For managing account access and permissions",
        category="Account Management",
        examples=["Deactivate former student", "Temporarily disable account"],
    ),
    "savePassword": OperationContext(
        description="Set or change user passwords",
        use_case="For password resets and initial account setup",
        category="Account Management",
        examples=["Reset forgotten password", "Set initial password for new user"],
    ),
    "changeUsername": OperationContext(
        description="Change a user's login username",
        use_case="When users need different usernames",
        category="Account Management",
        examples=["Update username after name change"],
    ),
    "getStudentCareer": OperationContext(
        description="Get complete academic history of a student",
        use_case="To see student's progression through grades and classes",
        category="Academic Records",
        examples=["Review student's school history", "Check grade progression"],
    ),
    "getSchoolyearDataOfClass": OperationContext(
        description="Get administrative details for a class in specific school year",
        use_case="For academic planning and record keeping",
        category="Academic Records",
        examples=["Check class details for 2024-2025"],
    ),
}


# ─── Parameter schemas ───────────────────────────────────────

_SCHEMAS: dict[str, dict] = {
    # User management
    "getUserDetails": _object({"userIdentifier": _USER_ID}),
    "getUserDetailsByNumber": _object({"number": _string("The internal number of the user")}),
    "getUserDetailsByUsername": _object(
        {"username": _string("The username of the user to get details for")}
    ),
    "getUserDetailsByScannableCode": _object(
        {"scannableCode": _string("The scannable code (e.g. from a student card)")}
    ),
    "saveUser": _object(
        {
            "username": _string(
                "Username for login (typically 'firstname.lastname', e.g., 'john.doe')"
            ),
            "name": _string("First name of the user"),
            "surname": _string("Last name of the user"),
            "basisrol": _ROLE,
        },
        {
            "passwd1": _string("Initial password (user must change on first login)"),
            "internnumber": _string("Internal number identifier"),
            "extranames": _string("Additional names of the user"),
            "initials": _string("User's initials"),
            "sex": _string("User's gender/sex"),
            "birthdate": _string("Date of birth in YYYY-MM-DD format"),
            "birthcity": _string("City of birth"),
            "birthcountry": _string("Country of birth"),
            "nationality": _string("User's nationality"),
            "address": _string("Street address"),
            "postalcode": _string("Postal code"),
            "city": _string("City of residence"),
            "country": _string("Country of residence"),
            "phone": _string("Phone number"),
            "mobile": _string("Mobile phone number"),
            "email": {"type": "string", "format": "email", "description": "Email address"},
            "passwd2": _string("Secondary password"),
            "passwd3": _string("Tertiary password"),
        },
    ),
    "delUser": _object({"userIdentifier": _USER_ID}, {"officialDate": _OFFICIAL_DATE}),
    "setAccountStatus": _object({
        "userIdentifier": _USER_ID,
        "accountStatus": _string(
            "Account status: 'actief', 'niet actief', or 'actief tot en met yyyy/mm/dd'"
        ),
    }),
    "changeUsername": _object({
        "internNumber": _string("Current internal number of the user"),
        "newUsername": _string("New username to assign"),
    }),
    "changeInternNumber": _object({
        "username": _string("Username of the target user"),
        "newInternNumber": _string("New internal number to assign"),
    }),
    "replaceInum": _object({
        "oldInum": _string("The current internal number"),
        "newInum": _string("The new internal number to replace with"),
    }),
    "savePassword": _object({
        "userIdentifier": _USER_ID,
        "password": _string("The new password to set for the user"),
        "accountType": _ACCOUNT_TYPE,
        "changePasswordAtNextLogin": _number(
            "Whether the user must change password at next login (1) or not (0)"
        ),
    }),
    "changePasswordAtNextLogin": _object(
        {"userIdentifier": _USER_ID, "accountType": _ACCOUNT_TYPE}
    ),
    "forcePasswordReset": _object({"userIdentifier": _USER_ID, "accountType": _ACCOUNT_TYPE}),
    "saveUserParameter": _object({
        "userIdentifier": _USER_ID,
        "paramName": _string(
            "The parameter name to save (e.g., 'email', 'status_coaccount1', 'Godsdienstkeuze')"
        ),
        "paramValue": _string(
            "The value for the parameter. For checkbox fields, use semicolon-separated values. "
            "For GO! roles, use JSON encoded array."
        ),
    }),
    "removeCoAccount": _object({"userIdentifier": _USER_ID, "accountType": _ACCOUNT_TYPE}),
    "getUserOfficialClass": _object({"userIdentifier": _USER_ID, "date": _DATE}),
    "getStudentCareer": _object({"userIdentifier": _USER_ID}),
    "unregisterStudent": _object({"userIdentifier": _USER_ID}, {"officialDate": _OFFICIAL_DATE}),
    # Classes and groups
    "saveClass": _object(
        {
            "name": _string("The name of the class or group"),
            "desc": _string("The description of the class or group"),
            "code": {
                **_CLASS_CODE,
                "description": f"Unique code identifier. Examples: {', '.join(CLASS_CODE_EXAMPLES)}",
            },
            "parent": _string("The parent class/group code (use '0' for root level)"),
            "untis": _string("The roster code (see UserDetails)"),
        },
        {
            "instituteNumber": _string(
                "Optional institute number, solely for adding an official class/group"
            ),
            "adminNumber": _string(
                "Optional administrative number, solely for adding an official class/group"
            ),
            "schoolYearDate": _string(
                "Optional school year date, format: YYYY-MM-DD, defaults to current school year"
            ),
        },
    ),
    "saveGroup": _object({
        "name": _string("The name of the group"),
        "desc": _string("The description of the group"),
        "code": _CLASS_CODE,
        "parent": _string("The parent group code"),
        "untis": _string("The Untis identifier"),
    }),
    "delClass": _object({"code": _CLASS_CODE}),
    "getAllAccounts": _object(
        {"code": _CLASS_CODE},
        {"recursive": _string("'1' to include sub-groups, '0' for the group only")},
    ),
    "getAllAccountsExtended": _object(
        {"code": _CLASS_CODE},
        {"recursive": _string("'1' to include sub-groups, '0' for the group only")},
    ),
    "saveUserToClass": _object(
        {"userIdentifier": _USER_ID, "class": _with_class_desc("The class code to add the user to")},
        {"officialDate": _OFFICIAL_DATE},
    ),
    "saveUserToClasses": _object({
        "userIdentifier": _USER_ID,
        "csvList": _string("CSV list of class codes to add the user to"),
    }),
    "saveUserToClassesAndGroups": _object(
        {
            "userIdentifier": _USER_ID,
            "csvList": _string("CSV list of class and group codes to add the user to"),
        },
        {"keepOld": _number("1 to keep existing memberships, 0 to replace them")},
    ),
    "removeUserFromGroup": _object(
        {
            "userIdentifier": _USER_ID,
            "class": _with_class_desc("The class or group code to remove the user from"),
        },
        {"officialDate": _OFFICIAL_DATE},
    ),
    "clearGroup": _object({"group": _string("Group code to clear")}, {"officialDate": _OFFICIAL_DATE}),
    "changeGroupOwners": _object({
        "code": _with_class_desc("Target class or group code to modify owners"),
        "userlist": _string("Comma-separated list of user identifiers"),
    }),
    "getClassTeachers": _object(
        optional={"getAllOwners": _boolean("Return all owners instead of only the titular teachers")}
    ),
    "getSchoolyearDataOfClass": _object(
        {"classCode": _with_class_desc(f"Class code ({CLASS_CODE_EXPLANATION})")}
    ),
    "saveSchoolyearDataOfClass": _object({
        "classCode": _with_class_desc(f"Class code ({CLASS_CODE_EXPLANATION})"),
        "date": {**_DATE, "description": "The date for the school year data"},
        "instituteNumber": _string("The institute number"),
        "administrativeGroupNumber": _string("The administrative group number"),
        "residence": _string("The residence location"),
        "domain": _string("The domain of study"),
        "principal": _string("The principal's name or identifier"),
    }),
    "saveClassList": _object({"serializedList": _string("Serialized list of classes")}),
    "saveClassListJson": _object({"jsonList": _string("JSON encoded list of classes")}),
    "getAllGroupsAndClasses": _object(),
    "getClassList": _object(),
    "getClassListJson": _object(),
    # Communication
    "sendMsg": _object(
        {
            "userIdentifier": _USER_ID,
            "title": _string("The title/subject of the message"),
            "body": _string("The body/content of the message"),
        },
        {
            "senderIdentifier": _string(
                "Identifier of message sender (use 'Null' for system messages)"
            ),
            "attachments": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Base64 encoded attachments",
            },
            "coaccount": {**_ACCOUNT_TYPE, "description": f"Co-account to send to:\n{format_co_account_types()}"},
            "copyToLVS": _boolean("Copy to student tracking system (LVS)"),
        },
    ),
    "saveSignature": _object({
        "userIdentifier": _USER_ID,
        "accountType": _ACCOUNT_TYPE,
        "signature": _string("The signature text or data to save"),
    }),
    # Attendance
    "getAbsents": _object({"userIdentifier": _USER_ID, "schoolYear": _SCHOOL_YEAR}),
    "getAbsentsByDate": _object({"date": {**_DATE, "description": "The date to get absents for"}}),
    "getAbsentsByDateAndGroup": _object({
        "date": {**_DATE, "description": "The date to get absents for"},
        "code": _CLASS_CODE,
    }),
    "getAbsentsWithAlias": _object({"userIdentifier": _USER_ID, "schoolYear": _SCHOOL_YEAR}),
    "getAbsentsWithAliasByDate": _object(
        {"date": {**_DATE, "description": "The date to get absents for"}}
    ),
    "getAbsentsWithInternalNumberByDate": _object(
        {"date": {**_DATE, "description": "The date to get absents for"}}
    ),
    "getAbsentsWithUsernameByDate": _object(
        {"date": {**_DATE, "description": "The date to get absents for"}}
    ),
    # Courses
    "addCourse": _object(
        {"coursename": _COURSE_NAME, "coursedesc": _COURSE_DESC},
        {"visibility": _number("1 for visible, 0 for hidden")},
    ),
    "addCourseStudents": _object({
        "coursename": _COURSE_NAME,
        "coursedesc": _COURSE_DESC,
        "groupIds": _string("Comma-separated list of class or group codes"),
    }),
    "addCourseTeacher": _object(
        {"coursename": _COURSE_NAME, "coursedesc": _COURSE_DESC, "userIdentifier": _USER_ID},
        {"internnummer": _string("Internal number of the teacher")},
    ),
    "getCourses": _object(),
    # Helpdesk
    "addHelpdeskTicket": _object({
        "userIdentifier": _USER_ID,
        "title": _string("Title/subject of the helpdesk ticket"),
        "description": _string("Detailed description of the issue"),
        "priority": _number("Priority of the ticket (1 = low, 2 = normal, 3 = high)"),
        "miniDbItem": _string("Identifier of the helpdesk mini database item"),
    }),
    "getHelpdeskMiniDbItems": _object(),
    # Photos
    "getAccountPhoto": _object({"userIdentifier": _USER_ID}),
    "setAccountPhoto": _object({
        "userIdentifier": _USER_ID,
        "photo": _string("Base64 encoded photo"),
    }),
    # System
    "startSkoreSync": _object(),
    "checkStatus": _object({"serviceId": _string("Task ID received from startSkoreSync")}),
    "getSkoreClassTeacherCourseRelation": _object(),
    "returnJsonErrorCodes": _object(),
    "returnCsvErrorCodes": _object(),
    "getReferenceField": _object(),
    "deactivateTwoFactorAuthentication": _object(
        {"userIdentifier": _USER_ID, "accountType": _ACCOUNT_TYPE}
    ),
}

_ATTENDANCE_OPERATIONS = frozenset({
    "getAbsents",
    "getAbsentsByDate",
    "getAbsentsByDateAndGroup",
    "getAbsentsWithAlias",
    "getAbsentsWithAliasByDate",
    "getAbsentsWithInternalNumberByDate",
    "getAbsentsWithUsernameByDate",
})


def smartschool_operations() -> list[OperationSpec]:
    """One OperationSpec per Smartschool operation, in declaration order."""
    specs: list[OperationSpec] = []
    for name, schema in _SCHEMAS.items():
        identifier = USER_IDENTIFIER if USER_IDENTIFIER in schema["properties"] else None
        enrichers = (annotate_absence_codes,) if name in _ATTENDANCE_OPERATIONS else ()
        specs.append(OperationSpec(
            name=name,
            input_schema=schema,
            context=_CONTEXTS.get(name),
            identifier_field=identifier,
            enrichers=enrichers,
        ))
    return specs
