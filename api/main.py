# api/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import accounts, books, circulation, fines
from core.config import configure_logging, settings
from core.sa.database import get_database

logger = logging.getLogger(__name__)

app = FastAPI(title="Library Circulation")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(books.router)
app.include_router(circulation.router)
app.include_router(accounts.router)
app.include_router(fines.router)

# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    configure_logging()
    database = get_database()
    # An unreachable store is fatal: let the exception stop the server
    database.check_connection()
    database.init_db()
    logger.info("Library circulation API ready")

@app.get("/")
async def root():
    return {"message": "Library circulation API"}

# Main execution
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_dirs=["api", "core"]
    )
