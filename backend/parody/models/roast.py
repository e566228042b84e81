"""Portfolio roast models."""

from typing import Optional

from pydantic import BaseModel, Field


class PortfolioProject(BaseModel):
    name: str
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    link: Optional[str] = None


class PortfolioContent(BaseModel):
    """Résumé/portfolio facts worth making fun of."""

    name: str = "Anonymous Developer"
    tagline: str = ""
    title: str = ""
    projects: list[PortfolioProject] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    cliches: list[str] = Field(default_factory=list)
    about_me: str = ""
    social_links: list[str] = Field(default_factory=list)
    experience: list[str] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)
    testimonials: list[str] = Field(default_factory=list)
    contact_info: list[str] = Field(default_factory=list)

    def has_project_about(self, keyword: str) -> bool:
        """True when any project name or description mentions *keyword*."""
        keyword = keyword.lower()
        return any(
            keyword in p.name.lower() or keyword in p.description.lower()
            for p in self.projects
        )


class RoastRequest(BaseModel):
    url: str = Field(..., description="Portfolio URL to roast")


class RoastResult(BaseModel):
    success: bool
    text: str
    audio_url: Optional[str] = Field(
        None, description="data:audio/mpeg;base64 URL, absent if narration failed"
    )
    portfolio_name: str
    strategy: str
    warnings: list[str] = Field(default_factory=list)
