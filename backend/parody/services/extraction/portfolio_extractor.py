"""Portfolio/résumé extractor for roast mode.

Heuristic selectors over common portfolio templates. Everything is optional;
an unrecognisable page still yields a usable (if thin) ``PortfolioContent``.
"""

import logging

from bs4 import BeautifulSoup, Tag

from parody.models.roast import PortfolioContent, PortfolioProject
from parody.services.extraction.dom import element_text, find_title, parse_html

logger = logging.getLogger(__name__)

MAX_PROJECTS = 10
MAX_SKILLS = 30
MAX_ABOUT_CHARS = 500
MAX_EXPERIENCE = 5
MAX_EDUCATION = 3
MAX_TESTIMONIALS = 3
MAX_SKILL_CHARS = 50
MAX_BLURB_CHARS = 200
MIN_TESTIMONIAL_CHARS = 20

PORTFOLIO_CLICHES = (
    "passionate",
    "problem solver",
    "clean code",
    "best practices",
    "cutting edge",
    "innovative",
    "creative",
    "team player",
    "self-starter",
    "detail-oriented",
    "full stack",
    "ninja",
    "rockstar",
    "guru",
    "10x",
    "unicorn",
)
SOCIAL_HOSTS = ("github.com", "linkedin.com", "twitter.com", "x.com")


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _first_text(root: Tag, selector: str) -> str:
    tag = root.select_one(selector)
    return element_text(tag) if tag is not None else ""


def _meta(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    return (tag.get("content") or "").strip() if tag is not None else ""


def _read_name(soup: BeautifulSoup) -> str:
    title_tag = find_title(soup)
    title_text = element_text(title_tag).split("-")[0].strip() if title_tag else ""
    return (
        _first_text(soup, "h1")
        or _meta(soup, property="og:title")
        or title_text
        or "Anonymous Developer"
    )


def _read_role(soup: BeautifulSoup) -> str:
    role = _first_text(soup, ".role, .title, .position")
    if role:
        return role
    for heading in soup.find_all("h2"):
        text = element_text(heading)
        if any(word in text for word in ("Developer", "Engineer", "Designer")):
            return text
    return ""


def _read_projects(soup: BeautifulSoup) -> list[PortfolioProject]:
    projects: list[PortfolioProject] = []
    for card in soup.select(".project, .portfolio-item, article, .work-item, .card"):
        name = _first_text(card, "h3, h4, .project-title")
        if not name:
            continue
        technologies = [
            element_text(t)
            for t in card.select(".tech, .technology, .stack, .tag, .badge")
            if element_text(t)
        ]
        link = card.find("a", href=True)
        projects.append(
            PortfolioProject(
                name=name,
                description=_first_text(card, "p, .project-description"),
                technologies=technologies,
                link=link["href"] if link is not None else None,
            )
        )
    return projects[:MAX_PROJECTS]


def _read_skills(soup: BeautifulSoup) -> list[str]:
    skills = [
        element_text(el)
        for el in soup.select(".skill, .technology, .tech-stack li, .skills li")
        if 0 < len(element_text(el)) < MAX_SKILL_CHARS
    ]
    for heading in soup.find_all(["h2", "h3"]):
        text = element_text(heading).lower()
        if "skill" not in text and "tech" not in text:
            continue
        listing = heading.find_next_sibling(["ul", "ol"])
        if listing is not None:
            skills.extend(element_text(li) for li in listing.find_all("li") if element_text(li))
    return _unique(skills)[:MAX_SKILLS]


def _read_about(soup: BeautifulSoup) -> str:
    about = ""
    for heading in soup.find_all(["h2", "h3"]):
        if "about" in element_text(heading).lower():
            paragraphs = heading.find_next_siblings("p", limit=3)
            about = " ".join(element_text(p) for p in paragraphs).strip()
    if not about:
        about = " ".join(element_text(el) for el in soup.select(".about, .bio, .introduction"))
    return about.strip()[:MAX_ABOUT_CHARS]


def _short_blocks(soup: BeautifulSoup, selector: str, limit: int) -> list[str]:
    blocks = [element_text(el) for el in soup.select(selector)]
    return [b for b in blocks if b and len(b) < MAX_BLURB_CHARS][:limit]


def extract_portfolio(html: str) -> PortfolioContent:
    """Pull roastable facts out of a portfolio page. Never raises on bad HTML."""
    try:
        soup = parse_html(html or "")
    except Exception as e:
        logger.warning(f"Portfolio parse failed, returning defaults: {e}")
        return PortfolioContent()

    for tag in soup.find_all(["script", "style"]):
        tag.decompose()

    social_links = [
        a["href"]
        for a in soup.find_all("a", href=True)
        if any(host in a["href"] for host in SOCIAL_HOSTS)
    ]
    contact_info = [
        a["href"] for a in soup.find_all("a", href=True) if a["href"].startswith("mailto:")
    ]
    testimonials = [
        element_text(el)
        for el in soup.select(".testimonial, .review, blockquote")
        if len(element_text(el)) > MIN_TESTIMONIAL_CHARS
    ][:MAX_TESTIMONIALS]

    body = soup.body or soup
    all_text = body.get_text(" ").lower()
    cliches = [c for c in PORTFOLIO_CLICHES if c in all_text]

    return PortfolioContent(
        name=_read_name(soup),
        tagline=(
            _first_text(soup, "h2")
            or _meta(soup, name="description")
            or _first_text(soup, ".hero-subtitle, .tagline, .subtitle")
        ),
        title=_read_role(soup),
        projects=_read_projects(soup),
        skills=_read_skills(soup),
        cliches=cliches,
        about_me=_read_about(soup),
        social_links=_unique(social_links),
        experience=_short_blocks(soup, ".experience, .work-experience, .job", MAX_EXPERIENCE),
        education=_short_blocks(soup, ".education, .school, .degree", MAX_EDUCATION),
        testimonials=testimonials,
        contact_info=_unique(contact_info),
    )
