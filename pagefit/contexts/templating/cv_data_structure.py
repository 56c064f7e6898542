"""
CV Document Structure

Defines the read-only document model that layout estimation walks. Documents are
built from the CV-data mappings produced elsewhere in the system (camelCase keys
such as ``professionalHeadline``), with snake_case aliases accepted as well.

Parsing is deliberately forgiving: absent or malformed nested values become
empty values instead of errors, so that estimation never fails on a partially
filled CV.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from pagefit.contexts.templating.exceptions import InvalidCVStructureError
from pagefit.utils.text_processing import clean_text_list, split_comma_list


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first value among keys that is present and not None."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _text(value: Any) -> Optional[str]:
    """Return value if it is a non-empty string, otherwise None."""
    if isinstance(value, str) and value:
        return value
    return None


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _bullets(value: Any) -> Tuple[str, ...]:
    # A bare string is one bullet, not a sequence of characters
    if isinstance(value, str):
        return (value,) if value else ()
    return tuple(clean_text_list(value))


def flatten_skills(data: Mapping[str, Any]) -> Tuple[str, ...]:
    """
    Flatten the skills of a CV-data mapping into a single tuple of strings.

    Sources, in order of precedence:
    1. ``technicalSkills`` as a comma-separated string
    2. ``skills`` as a flat list
    3. ``skills`` as a categorized mapping (category -> list), all categories
       concatenated in insertion order

    Any other shape yields an empty tuple. Non-string entries are dropped.

    Args:
        data: CV-data mapping

    Returns:
        Flattened skill names

    Example:
        >>> flatten_skills({"skills": {"technical": ["A", "B"], "tools": ["C"]}})
        ('A', 'B', 'C')
    """
    technical = _text(_lookup(data, "technicalSkills", "technical_skills"))
    if technical:
        return tuple(split_comma_list(technical))

    skills = data.get("skills")
    if isinstance(skills, (list, tuple)):
        return tuple(clean_text_list(skills))
    if isinstance(skills, Mapping):
        flattened = []
        for category_items in skills.values():
            flattened.extend(clean_text_list(category_items))
        return tuple(flattened)
    return ()


@dataclass(frozen=True)
class Identity:
    """
    Name block at the top of the sidebar.

    Attributes:
        name: Full name
        headline: Professional headline or job title shown under the name
    """

    name: Optional[str] = None
    headline: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Identity":
        personal_info = _mapping(_lookup(data, "personalInfo", "personal_info"))
        name = _text(_lookup(data, "fullName", "full_name", "name")) or _text(
            _lookup(personal_info, "fullName", "full_name", "name")
        )
        headline = _text(
            _lookup(data, "professionalHeadline", "professional_headline", "headline")
        ) or _text(data.get("title"))
        return cls(name=name, headline=headline)


@dataclass(frozen=True)
class Contact:
    """
    Contact fields shown in the sidebar.

    Only the number of present fields influences layout, never their length.
    """

    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None

    @property
    def present_count(self) -> int:
        """Number of contact fields with a value."""
        return sum(1 for f in fields(self) if getattr(self, f.name))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Contact":
        contact = _mapping(data.get("contact"))
        social = _mapping(data.get("social"))
        return cls(
            email=_text(contact.get("email")),
            phone=_text(contact.get("phone")),
            location=_text(contact.get("location")),
            linkedin=_text(contact.get("linkedin")) or _text(social.get("linkedin")),
            website=_text(contact.get("website")) or _text(social.get("website")),
            github=_text(social.get("github")) or _text(contact.get("github")),
        )


@dataclass(frozen=True)
class Entry:
    """
    A headed list entry: a job, a degree, a project or a certification.

    Attributes:
        title: Entry header (job title, degree, project or certificate name)
        organization: Company, institution or issuer
        location: Optional location line
        bullets: Achievement bullets, in order
    """

    title: Optional[str] = None
    organization: Optional[str] = None
    location: Optional[str] = None
    bullets: Tuple[str, ...] = ()

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        title_keys: Tuple[str, ...] = ("title",),
        organization_keys: Tuple[str, ...] = (),
    ) -> "Entry":
        return cls(
            title=_text(_lookup(data, *title_keys)),
            organization=_text(_lookup(data, *organization_keys)) if organization_keys else None,
            location=_text(data.get("location")),
            bullets=_bullets(_lookup(data, "achievements", "content", "bullets")),
        )


def _entries(value: Any, title_keys: Tuple[str, ...], organization_keys: Tuple[str, ...]) -> Tuple[Entry, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(
        Entry.from_dict(item, title_keys=title_keys, organization_keys=organization_keys)
        for item in value
        if isinstance(item, Mapping)
    )


# Header/organization key aliases per entry kind
ENTRY_KEYS: Dict[str, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    "experience": (("title", "position", "role"), ("company", "employer")),
    "education": (("degree", "title"), ("institution", "school")),
    "projects": (("title", "name"), ()),
    "certifications": (("name", "title"), ("issuer", "institution")),
}


@dataclass(frozen=True)
class CVDocument:
    """
    Immutable CV document consumed by content estimation.

    Every section is optional; an empty tuple or None means the section is
    absent and contributes no height.
    """

    identity: Identity = field(default_factory=Identity)
    contact: Contact = field(default_factory=Contact)
    summary: Optional[str] = None
    experience: Tuple[Entry, ...] = ()
    education: Tuple[Entry, ...] = ()
    skills: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()
    hobbies: Tuple[str, ...] = ()
    projects: Tuple[Entry, ...] = ()
    certifications: Tuple[Entry, ...] = ()

    @classmethod
    def empty(cls) -> "CVDocument":
        """Document with every section absent."""
        return cls()

    @classmethod
    def from_dict(cls, data: Any) -> "CVDocument":
        """
        Build a document from a CV-data mapping.

        Args:
            data: Mapping in the CV-data shape (camelCase or snake_case keys)

        Returns:
            CVDocument with malformed nested values treated as absent

        Raises:
            InvalidCVStructureError: If data is not a mapping

        Example:
            >>> doc = CVDocument.from_dict({"fullName": "Ada", "skills": ["Python"]})
            >>> doc.skills
            ('Python',)
        """
        if not isinstance(data, Mapping):
            raise InvalidCVStructureError(
                f"CV document must be a mapping, got {type(data).__name__}"
            )

        entries = {
            kind: _entries(data.get(kind), title_keys, organization_keys)
            for kind, (title_keys, organization_keys) in ENTRY_KEYS.items()
        }

        return cls(
            identity=Identity.from_dict(data),
            contact=Contact.from_dict(data),
            summary=_text(_lookup(data, "summary", "profile")),
            skills=flatten_skills(data),
            languages=_language_names(data.get("languages")),
            hobbies=tuple(clean_text_list(_lookup(data, "hobbies", "interests"))),
            **entries,
        )

    @classmethod
    def coerce(cls, document: Any) -> "CVDocument":
        """Return document unchanged if already a CVDocument, otherwise parse it."""
        if isinstance(document, cls):
            return document
        return cls.from_dict(document)


def _language_names(value: Any) -> Tuple[str, ...]:
    """Languages are strings or {"language"/"name": ..., "level": ...} rows."""
    if not isinstance(value, (list, tuple)):
        return ()
    names = []
    for item in value:
        if isinstance(item, Mapping):
            item = _lookup(item, "language", "name")
        if isinstance(item, str) and item:
            names.append(item)
    return tuple(names)
