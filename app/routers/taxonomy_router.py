# /app/routers/taxonomy_router.py

from fastapi import APIRouter

from ..services import taxonomy

router = APIRouter()


@router.get("", summary="Get the Observation Taxonomy")
def get_taxonomy():
    """Returns the category tree and the example phrases used to build the recording forms."""
    return {
        "categories": taxonomy.CATEGORIES,
        "examples": taxonomy.EXAMPLES,
        "defaultExamples": taxonomy.DEFAULT_EXAMPLES,
    }
