# PantryPlan API Main Entry Point
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from .core.errors import RecipeImportError, FetchFailed
from .settings import settings
from .routers.ready import router as ready_router
from .routers.recipes import router as recipes_router
from .routers.ingredients import router as ingredients_router
from .routers.plan import router as plan_router
from .routers.shopping import router as shopping_router
from .routers.inventory import router as inventory_router
from .routers.nutrition import router as nutrition_router

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("pantryplan")

# Rate limiter (per-IP)
limiter = Limiter(key_func=get_remote_address, default_limits=["100/minute"])

app = FastAPI(title="PantryPlan API", version="0.1.0")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RecipeImportError)
async def recipe_import_error_handler(request: Request, exc: RecipeImportError):
    logger.info("Recipe import failed (%s): %s", type(exc).__name__, exc.message)
    body = {"error": exc.message}
    if isinstance(exc, FetchFailed) and exc.detail:
        body["detail"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=body)


app.include_router(ready_router, prefix="/api", tags=["ready"])
app.include_router(recipes_router, prefix="/api", tags=["recipes"])
app.include_router(ingredients_router, prefix="/api/ingredients", tags=["ingredients"])
app.include_router(plan_router, prefix="/api", tags=["plan"])
app.include_router(shopping_router, prefix="/api/shopping", tags=["shopping"])
app.include_router(inventory_router, prefix="/api/inventory", tags=["inventory"])
app.include_router(nutrition_router, prefix="/api", tags=["nutrition"])
