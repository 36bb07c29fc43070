"""Render retrieved results into the prompt's retrieved-information block."""

from .contracts import RetrievedContext, SearchResult

HEADER = "## RETRIEVED INFORMATION (Use this as primary source for your response)"
BUSINESS_HEADING = "### 📍 BUSINESS/LOCATION RESULTS (Include specific store names, addresses, and hours)"
OFFICIAL_HEADING = "### 🏛️ OFFICIAL GOVERNMENT SOURCES (Highest Priority - MUST cite these)"
OFFICIAL_EMPTY_HEADING = "### 🏛️ OFFICIAL GOVERNMENT SOURCES"
NEWS_HEADING = "### 📰 NEWS SOURCES (For Context & Recent Updates)"
COMMUNITY_HEADING = "### 💬 COMMUNITY DISCUSSIONS (Anecdotal - Use with Disclaimer)"

NO_OFFICIAL_SOURCES = "No official sources found for this query."
NO_SOURCES_GUIDANCE = (
    "No sources retrieved. Provide advice based on general knowledge and "
    "recommend users verify with official sources."
)


def _render_results(results: list[SearchResult], label: str) -> str:
    return "".join(
        f"\n**{label} {idx}: [{r.title}]({r.url})**\n{r.excerpt}\n"
        for idx, r in enumerate(results, start=1)
    )


def build_retrieved_context(context: RetrievedContext) -> str:
    """
    Build the retrieved-information block appended to the system prompt.

    Business results come first so location questions are answered from
    store listings. The official section is always present unless business
    results already cover the query; news and community appear only when
    non-empty.

    Args:
        context: Results of one retrieval pass

    Returns:
        Markdown text starting with a blank-line separator
    """
    text = f"\n\n{HEADER}\n"

    if context.business:
        text += f"\n{BUSINESS_HEADING}\n"
        text += _render_results(context.business, "Result")

    if context.official:
        text += f"\n{OFFICIAL_HEADING}\n"
        text += _render_results(context.official, "Source")
    elif not context.business:
        text += f"\n{OFFICIAL_EMPTY_HEADING}\n{NO_OFFICIAL_SOURCES}\n"

    if context.news:
        text += f"\n{NEWS_HEADING}\n"
        text += _render_results(context.news, "Source")

    if context.community:
        text += f"\n{COMMUNITY_HEADING}\n"
        text += _render_results(context.community, "Source")

    if context.is_empty:
        text += f"\n{NO_SOURCES_GUIDANCE}\n"

    return text
