"""Templated opening-message suggestions for a scored pair.

Rules run in priority order and each contributes at most one starter:

1. shared-interest   - first interest of A that B also lists
2. shared-industry   - same industry, asks about a recent project at B's company
3. hiring            - one side hiring, the other job-seeking (direction-sensitive)
4. fundraising       - one side fundraising, the other investing (direction-sensitive)
5. shared-session    - a session both plan to attend, else the shared event
6. generic           - fills the remaining slots, referencing both companies

The result always has exactly three items. Starters are generated fresh on
every call and never cached. `tips` adds short guidance keyed on the score
breakdown.
"""
from __future__ import annotations

from typing import List, Optional

from .data_models import CompatibilityScore, ConversationStarter, Profile

STARTER_COUNT = 3
TIP_THRESHOLD = 70
LOW_OVERALL_TIP_THRESHOLD = 50
ALWAYS_TIPS = (
    "Listen actively and ask follow-up questions",
    "Share your own experiences to build rapport",
)

GENERIC_TEMPLATES = (
    "Hi {b_name}! Great to connect at the conference. I'd love to hear about your work at "
    "{b_company} and share some insights from my experience at {a_company}.",
    "Hi {b_name}, what brings you to the event this year? I'm curious how the team at "
    "{b_company} is approaching it compared to what we're doing at {a_company}.",
    "Hi {b_name}! I'm always looking to learn from people outside {a_company}. What's the most "
    "interesting thing {b_company} is working on right now?",
)


def _name(p: Profile) -> str:
    return p.name.split()[0] if p.name.strip() else "there"


def _company(p: Profile, fallback: str) -> str:
    return p.company or fallback


def _shared_interest(a: Profile, b: Profile) -> Optional[ConversationStarter]:
    interests_b = set(b.interests)
    common = next((i for i in a.interests if i in interests_b), None)
    if common is None:
        return None
    return ConversationStarter(
        text=(
            f"Hi {_name(b)}! I noticed we both have an interest in {common}. "
            f"Have you been working on any {common} projects lately?"
        ),
        reasoning=f"shared-interest: references the common interest in {common} to establish common ground",
    )


def _shared_industry(a: Profile, b: Profile) -> Optional[ConversationStarter]:
    if not a.industry or a.industry != b.industry:
        return None
    return ConversationStarter(
        text=(
            f"Great to connect with another {b.industry} professional! I'm curious about your "
            f"experience at {_company(b, 'your company')} - what's the most exciting project "
            f"you've worked on there recently?"
        ),
        reasoning=f"shared-industry: both work in {b.industry}, opens with genuine professional interest",
    )


def _hiring(a: Profile, b: Profile) -> Optional[ConversationStarter]:
    if "hiring" in a.goals and "job-seeking" in b.goals:
        role = f"{b.title} candidates" if b.title else "people with your background"
        return ConversationStarter(
            text=(
                f"Hi {_name(b)}! I saw you're exploring new opportunities. We're looking for "
                f"talented {role} at {_company(a, 'my company')}. Would love to chat about what "
                f"you're looking for in your next role."
            ),
            reasoning="hiring: direct value proposition from the hiring side to a job seeker",
        )
    if "job-seeking" in a.goals and "hiring" in b.goals:
        role = f"a {a.title}" if a.title else "someone exploring my next role"
        return ConversationStarter(
            text=(
                f"Hi {_name(b)}! I heard {_company(b, 'your team')} is hiring. As {role}, I'd love "
                f"to learn more about the team and the roles you're trying to fill."
            ),
            reasoning="hiring: job seeker introduces themselves to the hiring side",
        )
    return None


def _fundraising(a: Profile, b: Profile) -> Optional[ConversationStarter]:
    if "investing" in a.goals and "fundraising" in b.goals:
        return ConversationStarter(
            text=(
                f"Hi {_name(b)}! I'm actively investing and would love to hear what you're "
                f"building at {_company(b, 'your startup')}. Are you raising at the moment?"
            ),
            reasoning="fundraising: investor reaches out to a founder who is raising",
        )
    if "fundraising" in a.goals and "investing" in b.goals:
        return ConversationStarter(
            text=(
                f"Hi {_name(b)}! We're raising for {_company(a, 'my startup')} and I'd value your "
                f"perspective as an investor. What kinds of startups are you most excited to fund?"
            ),
            reasoning="fundraising: founder who is raising reaches out to an investor",
        )
    return None



def _shared_context(a: Profile, b: Profile) -> Optional[ConversationStarter]:
    sessions_b = set(b.planned_sessions)
    session = next((s for s in a.planned_sessions if s in sessions_b), None)
    if session is not None:
        return ConversationStarter(
            text=(
                f"Hi {_name(b)}! Looks like we're both planning to attend {session}. "
                f"Want to grab a seat together and compare notes afterwards?"
            ),
            reasoning=f"shared-session: both plan to attend {session}, an easy reason to meet in person",
        )
    if a.current_event and a.current_event == b.current_event:
        return ConversationStarter(
            text=(
                f"Hi {_name(b)}! Are you enjoying {b.current_event} so far? "
                f"Which talks have been worth it for you?"
            ),
            reasoning=f"shared-event: both attending {b.current_event}, opens with the event itself",
        )
    return None

RULES = (_shared_interest, _shared_industry, _hiring, _fundraising, _shared_context)


class ConversationStarterGenerator:
    def generate(self, a: Profile, b: Profile, score: CompatibilityScore) -> List[ConversationStarter]:
        """Return exactly three starters that `a` could use to open a conversation with `b`."""
        starters: List[ConversationStarter] = []
        for rule in RULES:
            starter = rule(a, b)
            if starter is not None:
                starters.append(starter)
            if len(starters) == STARTER_COUNT:
                return starters

        fields = {
            "b_name": _name(b),
            "a_company": _company(a, "my company"),
            "b_company": _company(b, "your company"),
        }
        i = 0
        while len(starters) < STARTER_COUNT:
            template = GENERIC_TEMPLATES[i % len(GENERIC_TEMPLATES)]
            starters.append(
                ConversationStarter(
                    text=template.format(**fields),
                    reasoning=f"generic: friendly networking opener (overall compatibility {score.overall})",
                )
            )
            i += 1
        return starters

    def tips(self, score: CompatibilityScore) -> List[str]:
        """Return conversation guidance for a scored pair, strongest dimensions first."""
        breakdown = score.breakdown
        tips: List[str] = []
        if breakdown.professional > TIP_THRESHOLD:
            tips.append("Focus on professional topics - you have strong career alignment")
        if breakdown.interests > TIP_THRESHOLD:
            tips.append("Explore your shared interests - that's your strongest common ground")
        if breakdown.intent > TIP_THRESHOLD:
            tips.append("Be direct about your goals - they align well")
        if breakdown.contextual > TIP_THRESHOLD:
            tips.append("Use the event itself as an opener - you're following the same sessions")
        if score.overall < LOW_OVERALL_TIP_THRESHOLD:
            tips.append("Embrace the diversity - different perspectives can be valuable")
        tips.extend(ALWAYS_TIPS)
        return tips
