from typing import Annotated

from pydantic import Field

HANDLE_DESCRIPTION = "The GitHub username to look up (e.g., torvalds)."
HANDLE = Annotated[str, Field(description=HANDLE_DESCRIPTION)]

WAIT_FOR_ENRICHMENT_DESCRIPTION = "Whether to wait for the AI profile analysis to finish before returning."
WAIT_FOR_ENRICHMENT = Annotated[bool, Field(description=WAIT_FOR_ENRICHMENT_DESCRIPTION)]
