"""Versioned retrieval profile: source tiers, caps and excerpt sizes.

All tier behaviour lives here so the retriever, the context assembler and the
prompts agree on a single revision.
"""

from dataclasses import dataclass

PROFILE_VERSION = "2025.1"


@dataclass(frozen=True)
class TierSpec:
    """One source tier searched independently of the others."""

    name: str
    sites: tuple[str, ...]
    limit: int
    excerpt_chars: int = 500
    query_suffix: str = ""


OFFICIAL_TIER = TierSpec(
    name="official",
    sites=(
        "gov.sg",
        "hdb.gov.sg",
        "mom.gov.sg",
        "moh.gov.sg",
        "iras.gov.sg",
        "ica.gov.sg",
        "lta.gov.sg",
        "msf.gov.sg",
        "imda.gov.sg",
        "ask.gov.sg",
        "cpf.gov.sg",
        "healthhub.sg",
        "mycareersfuture.gov.sg",
        "singpass.gov.sg",
        "moe.gov.sg",
        "mnd.gov.sg",
        "ns.sg",
    ),
    limit=3,
)

NEWS_TIER = TierSpec(
    name="news",
    sites=("channelnewsasia.com", "straitstimes.com", "todayonline.com", "tnp.sg"),
    limit=2,
)

COMMUNITY_TIER = TierSpec(
    name="community",
    sites=("reddit.com/r/singapore", "reddit.com/r/askSingapore", "hardwarezone.com.sg"),
    limit=2,
)

# Open search; store and opening-hours pages need longer excerpts
BUSINESS_TIER = TierSpec(
    name="business",
    sites=(),
    limit=5,
    excerpt_chars=800,
    query_suffix="Singapore opening hours address",
)

# Searched for every query; order matches the official, news, community fields
SITE_SCOPED_TIERS = (OFFICIAL_TIER, NEWS_TIER, COMMUNITY_TIER)

SEARCH_LANG = "en"
SEARCH_COUNTRY = "sg"

# Side-channel limits
MAX_INFERRED_PREFERENCES_HEADER = 5
