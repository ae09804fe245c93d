from fastapi import APIRouter, Depends, Query

from academy.api.dependencies import get_catalog
from academy.content.catalog import AlgorithmCatalog
from academy.core.exceptions import NotFoundError

router = APIRouter()


@router.get("")
def list_algorithms(catalog: AlgorithmCatalog = Depends(get_catalog)):
    summaries = catalog.list()
    return {"success": True, "data": summaries, "count": len(summaries)}


# Fixed paths are declared before the parameterised ones.
@router.get("/search")
def search_algorithms(q: str = Query("", max_length=200), catalog: AlgorithmCatalog = Depends(get_catalog)):
    results = catalog.search(q)
    return {"success": True, "data": results, "count": len(results)}


@router.get("/categories")
def list_categories(catalog: AlgorithmCatalog = Depends(get_catalog)):
    categories = catalog.categories()
    return {"success": True, "data": categories, "count": len(categories)}


@router.get("/stats")
def algorithm_stats(catalog: AlgorithmCatalog = Depends(get_catalog)):
    return {"success": True, "data": catalog.stats()}


@router.get("/detailed/{algorithm_id}")
def get_algorithm(algorithm_id: str, catalog: AlgorithmCatalog = Depends(get_catalog)):
    record = catalog.get(algorithm_id)
    if record is None:
        raise NotFoundError("Algorithm not found")
    return {"success": True, "data": record}


@router.get("/category/{category}")
def list_by_category(category: str, catalog: AlgorithmCatalog = Depends(get_catalog)):
    summaries = catalog.list_by_category(category)
    return {"success": True, "data": summaries, "count": len(summaries)}
