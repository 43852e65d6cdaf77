"""
Profession Profiles
Static, read-only descriptors used to parameterize prompt text.
"""

from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict

from suhbat.core.exceptions import InvalidProfessionError


class ProfessionProfile(BaseModel):
    """A job role the interviewer can simulate."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    skills: Tuple[str, ...]
    focus: str


_PROFILES: List[ProfessionProfile] = [
    ProfessionProfile(
        id="frontend",
        name="Frontend Developer",
        skills=("HTML/CSS/JavaScript", "React/Vue/Angular", "Responsive Design",
                "Web Performance", "REST APIs", "Git"),
        focus="client-side web development, user interfaces, and interactive experiences",
    ),
    ProfessionProfile(
        id="backend",
        name="Backend Developer",
        skills=("Node.js/Python/Java", "SQL/NoSQL Databases", "REST APIs",
                "Authentication", "Microservices", "Cloud"),
        focus="server-side logic, databases, APIs, and system architecture",
    ),
    ProfessionProfile(
        id="designer",
        name="UI/UX Designer",
        skills=("Figma/Adobe XD", "User Research", "Prototyping",
                "Design Systems", "Typography", "Accessibility"),
        focus="user experience design, interface design, and design thinking",
    ),
    ProfessionProfile(
        id="product-manager",
        name="Product Manager",
        skills=("Product Strategy", "Agile/Scrum", "Market Analysis",
                "Roadmaps", "Stakeholder Management", "Metrics"),
        focus="product vision, strategy, prioritization, and cross-functional leadership",
    ),
    ProfessionProfile(
        id="marketing-manager",
        name="Marketing Manager",
        skills=("Digital Marketing", "SEO/SEM", "Content Marketing",
                "Analytics", "Social Media", "Campaign Management"),
        focus="marketing strategy, campaigns, brand awareness, and customer acquisition",
    ),
    ProfessionProfile(
        id="data-scientist",
        name="Data Scientist",
        skills=("Python/R", "Machine Learning", "Statistics",
                "Data Visualization", "SQL", "Deep Learning"),
        focus="data analysis, machine learning models, statistical analysis, and insights",
    ),
]

PROFESSIONS: Dict[str, ProfessionProfile] = {profile.id: profile for profile in _PROFILES}


def list_professions() -> List[ProfessionProfile]:
    """Return all profiles in their fixed display order."""
    return list(PROFESSIONS.values())


def get_profession(profession_id) -> ProfessionProfile:
    """
    Look up a profile by id.

    Raises:
        InvalidProfessionError: If the id is not one of the static keys
    """
    if not isinstance(profession_id, str) or profession_id not in PROFESSIONS:
        raise InvalidProfessionError(profession_id)
    return PROFESSIONS[profession_id]
