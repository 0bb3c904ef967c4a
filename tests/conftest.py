"""
Pytest configuration and shared fixtures.
"""

import itertools
from typing import Dict, List

import pytest

from matchmaking import reset_service
from matchmaking.compatibility import CompatibilityEngine
from matchmaking.data_models import Profile
from matchmaking.matcher import MatchFinder
from matchmaking.starters import ConversationStarterGenerator


@pytest.fixture
def personas() -> Dict[str, Profile]:
    """Attendee personas used across the scoring and starter tests."""
    return {
        "cto": Profile(
            id="cto_001",
            name="Alice Chen",
            title="CTO",
            company="TechStartup Inc",
            industry="Technology",
            interests=["Scaling", "Architecture", "Team Building", "AI"],
            goals=["hiring", "networking", "mentoring"],
            plannedSessions=["scaling-101", "ai-workshop"],
            currentEvent="gamescom2025",
        ),
        "engineer": Profile(
            id="eng_001",
            name="Bob Smith",
            title="Senior Engineer",
            company="GameDev Studio",
            industry="Technology",
            interests=["Architecture", "Performance", "Gaming", "AI"],
            goals=["learning", "networking", "job-seeking"],
            plannedSessions=["scaling-101", "performance-talk"],
            currentEvent="gamescom2025",
        ),
        "pm": Profile(
            id="pm_001",
            name="Carol Davis",
            title="Product Manager",
            company="BigTech Corp",
            industry="Technology",
            interests=["Product Strategy", "User Research", "Analytics"],
            goals=["networking", "learning", "partnership"],
            plannedSessions=["product-keynote", "analytics-workshop"],
            currentEvent="gamescom2025",
        ),
        "founder": Profile(
            id="founder_001",
            name="David Lee",
            title="Founder & CEO",
            company="AI Gaming Startup",
            industry="Gaming",
            interests=["AI", "Gaming", "Fundraising", "Strategy"],
            goals=["fundraising", "networking", "partnership"],
            plannedSessions=["investor-panel", "ai-workshop"],
            currentEvent="gamescom2025",
        ),
        "investor": Profile(
            id="investor_001",
            name="Eve Martinez",
            title="Angel Investor",
            company="Martinez Ventures",
            industry="Venture Capital",
            interests=["AI", "Gaming", "Startups", "Innovation"],
            goals=["investing", "networking", "mentoring"],
            plannedSessions=["investor-panel", "startup-showcase"],
            currentEvent="gamescom2025",
        ),
        "fintech": Profile(
            id="fintech_001",
            name="Frank Wilson",
            title="CTO",
            company="FinTech Solutions",
            industry="Financial Services",
            interests=["Blockchain", "Security", "Compliance"],
            goals=["networking", "learning"],
            plannedSessions=["blockchain-talk"],
            currentEvent="money2020",
        ),
        "healthcare": Profile(
            id="health_001",
            name="Grace Kim",
            title="Senior Engineer",
            company="HealthTech Inc",
            industry="Healthcare",
            interests=["ML", "Data Science", "Healthcare"],
            goals=["networking", "learning"],
            plannedSessions=["ml-workshop"],
            currentEvent="himss2025",
        ),
    }


@pytest.fixture
def empty_profiles() -> List[Profile]:
    return [Profile(id="min1"), Profile(id="min2")]


@pytest.fixture
def pool_50() -> List[Profile]:
    """Fifty deterministic attendees cycling through titles, industries and goals."""
    titles = ["CTO", "Senior Engineer", "Product Manager", "Designer", "Founder", "Investor",
              "Junior Developer", "DevOps Lead", "VP Sales", "Data Scientist"]
    industries = ["Technology", "Gaming", "Healthcare", "Financial Services", "Venture Capital"]
    interests = ["AI", "Gaming", "Web3", "Architecture", "Security", "Design", "Analytics"]
    goals = ["networking", "hiring", "job-seeking", "fundraising", "investing", "mentoring", "learning"]
    sessions = ["keynote", "ai-workshop", "investor-panel", "scaling-101"]

    def take(values, start, n):
        cycle = itertools.islice(itertools.cycle(values), start, start + n)
        return list(cycle)

    return [
        Profile(
            id=f"p{i:03d}",
            name=f"Attendee {i}",
            title=titles[i % len(titles)],
            company=f"Company {i % 7}",
            industry=industries[i % len(industries)],
            interests=take(interests, i, 1 + i % 3),
            goals=take(goals, i, 1 + i % 2),
            plannedSessions=take(sessions, i, i % 3),
            currentEvent="gamescom2025" if i % 2 == 0 else "devcon",
        )
        for i in range(50)
    ]


@pytest.fixture
def engine() -> CompatibilityEngine:
    return CompatibilityEngine()


@pytest.fixture
def finder(engine) -> MatchFinder:
    return MatchFinder(engine)


@pytest.fixture
def generator() -> ConversationStarterGenerator:
    return ConversationStarterGenerator()


@pytest.fixture(autouse=True)
def _fresh_default_service():
    reset_service()
    yield
    reset_service()
