"""Seattle corpus lookup — news, events, travel blogs and neighborhood guides."""
import logging
from typing import Iterable

from pydantic import BaseModel, Field

from ...corpus import ScoredChunk
from ..registry import ToolContext, ToolName, register_tool

logger = logging.getLogger(__name__)


def format_chunk(chunk: ScoredChunk) -> str:
    """Render one chunk as a labelled fenced block."""
    return f"\n\nChunk from source: {chunk.source or ''}\n```chunk \n{chunk.content}\n```\n"


def format_chunks(chunks: Iterable[ScoredChunk]) -> str:
    return "".join(format_chunk(c) for c in chunks)


class LookUpSeattleInfoArgs(BaseModel):
    query: str = Field(
        description="The search query. It will be embedded and used in a vector search against the corpus.",
    )


@register_tool(
    ToolName.LOOK_UP_SEATTLE_INFO,
    description=(
        "Look up information about Seattle from a corpus that includes recent news stories, "
        "public events, travel blogs and guides, neighborhood blogs, and more."
    ),
    args_model=LookUpSeattleInfoArgs,
)
async def look_up_seattle_info(args: LookUpSeattleInfoArgs, ctx: ToolContext) -> str:
    results = await ctx.corpus.search(args.query, limit=ctx.config.corpus_chunk_limit)
    logger.info(f"Got {len(results)} results from Fixie corpus search for {args.query!r}: "
                f"{[(c.document_name, c.score) for c in results]}")
    return format_chunks(results)
