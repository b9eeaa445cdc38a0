"""
Schoolgate Risk Registry

Static mapping from remote operation name to risk tier, plus the
operation-specific warning texts. Built once at import time and never
mutated.

Unknown operation names resolve to DEFAULT_TIER (MODERATE). An
operation is never treated as SAFE just because nobody classified it.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from schoolgate.core.models import RiskTier

DEFAULT_TIER = RiskTier.MODERATE


# ─── Smartschool classification ──────────────────────────────

SMARTSCHOOL_TIERS: Mapping[str, RiskTier] = MappingProxyType({
    # Read-only
    "getUserDetails": RiskTier.SAFE,
    "getUserDetailsByUsername": RiskTier.SAFE,
    "getUserDetailsByNumber": RiskTier.SAFE,
    "getUserDetailsByScannableCode": RiskTier.SAFE,
    "getAbsents": RiskTier.SAFE,
    "getAbsentsByDate": RiskTier.SAFE,
    "getAbsentsByDateAndGroup": RiskTier.SAFE,
    "getAbsentsWithAlias": RiskTier.SAFE,
    "getAbsentsWithAliasByDate": RiskTier.SAFE,
    "getAbsentsWithInternalNumberByDate": RiskTier.SAFE,
    "getAbsentsWithUsernameByDate": RiskTier.SAFE,
    "getClassTeachers": RiskTier.SAFE,
    "getSchoolyearDataOfClass": RiskTier.SAFE,
    "getStudentCareer": RiskTier.SAFE,
    "getUserOfficialClass": RiskTier.SAFE,
    "getAccountPhoto": RiskTier.SAFE,
    "getAllAccounts": RiskTier.SAFE,
    "getAllAccountsExtended": RiskTier.SAFE,
    "getAllGroupsAndClasses": RiskTier.SAFE,
    "getClassList": RiskTier.SAFE,
    "getClassListJson": RiskTier.SAFE,
    "getHelpdeskMiniDbItems": RiskTier.SAFE,
    "getCourses": RiskTier.SAFE,
    "returnJsonErrorCodes": RiskTier.SAFE,
    "returnCsvErrorCodes": RiskTier.SAFE,
    "checkStatus": RiskTier.SAFE,
    "getReferenceField": RiskTier.SAFE,
    "getSkoreClassTeacherCourseRelation": RiskTier.SAFE,
    # Reversible modifications
    "sendMsg": RiskTier.MODERATE,
    "saveSignature": RiskTier.MODERATE,
    "setAccountPhoto": RiskTier.MODERATE,
    "saveUserParameter": RiskTier.MODERATE,
    "changeUsername": RiskTier.MODERATE,
    "changeInternNumber": RiskTier.MODERATE,
    "replaceInum": RiskTier.MODERATE,
    "savePassword": RiskTier.MODERATE,
    "changePasswordAtNextLogin": RiskTier.MODERATE,
    "forcePasswordReset": RiskTier.MODERATE,
    "saveUserToClass": RiskTier.MODERATE,
    "saveUserToClasses": RiskTier.MODERATE,
    "saveUserToClassesAndGroups": RiskTier.MODERATE,
    "removeUserFromGroup": RiskTier.MODERATE,
    "addHelpdeskTicket": RiskTier.MODERATE,
    "setAccountStatus": RiskTier.MODERATE,
    # High impact, potentially irreversible
    "saveUser": RiskTier.DESTRUCTIVE,
    "saveClass": RiskTier.DESTRUCTIVE,
    "saveGroup": RiskTier.DESTRUCTIVE,
    "addCourse": RiskTier.DESTRUCTIVE,
    "addCourseStudents": RiskTier.DESTRUCTIVE,
    "addCourseTeacher": RiskTier.DESTRUCTIVE,
    "changeGroupOwners": RiskTier.DESTRUCTIVE,
    "saveClassList": RiskTier.DESTRUCTIVE,
    "saveClassListJson": RiskTier.DESTRUCTIVE,
    "saveSchoolyearDataOfClass": RiskTier.DESTRUCTIVE,
    "removeCoAccount": RiskTier.DESTRUCTIVE,
    # Permanent deletion or system-level effects
    "delUser": RiskTier.CRITICAL,
    "delClass": RiskTier.CRITICAL,
    "clearGroup": RiskTier.CRITICAL,
    "unregisterStudent": RiskTier.CRITICAL,
    "startSkoreSync": RiskTier.CRITICAL,
    "deactivateTwoFactorAuthentication": RiskTier.CRITICAL,
})

SMARTSCHOOL_SPECIFIC_WARNINGS: Mapping[str, str] = MappingProxyType({
    "delUser": "This will PERMANENTLY DELETE a user and all their data!",
    "delClass": "This will PERMANENTLY DELETE a class and all associated data!",
    "clearGroup": "This will REMOVE ALL USERS from the specified group!",
    "unregisterStudent": "This will UNREGISTER the student from the school!",
    "startSkoreSync": "This will start a system-wide synchronization process.",
    "saveUser": "This will CREATE or MODIFY user accounts in the school system.",
    "saveClass": "This will CREATE or MODIFY classes in the school system.",
})


class RiskRegistry:
    """Read-only lookup of operation tiers and specific warnings."""

    def __init__(
        self,
        tiers: Mapping[str, RiskTier] | None = None,
        specific_warnings: Mapping[str, str] | None = None,
        default_tier: RiskTier = DEFAULT_TIER,
    ):
        if default_tier == RiskTier.SAFE:
            raise ValueError("Unclassified operations must not default to SAFE")
        self._tiers = MappingProxyType(dict(SMARTSCHOOL_TIERS if tiers is None else tiers))
        self._warnings = MappingProxyType(
            dict(SMARTSCHOOL_SPECIFIC_WARNINGS if specific_warnings is None else specific_warnings)
        )
        self._default_tier = default_tier

    @property
    def default_tier(self) -> RiskTier:
        return self._default_tier

    def tier_of(self, name: str) -> RiskTier:
        """Tier of an operation, or the default tier for unknown names."""
        return self._tiers.get(name, self._default_tier)

    def specific_warning(self, name: str) -> str | None:
        return self._warnings.get(name)

    def is_classified(self, name: str) -> bool:
        return name in self._tiers

    def names(self, tier: RiskTier | None = None) -> list[str]:
        """Classified operation names, optionally restricted to one tier."""
        if tier is None:
            return list(self._tiers)
        return [name for name, t in self._tiers.items() if t == tier]

    def __contains__(self, name: object) -> bool:
        return name in self._tiers

    def __len__(self) -> int:
        return len(self._tiers)


default_registry = RiskRegistry()


def tier_of(name: str) -> RiskTier:
    """Tier lookup against the Smartschool registry."""
    return default_registry.tier_of(name)
