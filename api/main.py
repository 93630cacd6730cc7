# api/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.conversation import SessionSweeper
from catalog.sa.database import get_database
from api.routes import works, chat

logger = logging.getLogger(__name__)

app = FastAPI(title="Library catalog")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(works.router)
app.include_router(chat.router)

sweeper = SessionSweeper(chat.session_store)

@app.on_event("startup")
async def startup_event():
    db = get_database()
    db.init_db()
    sweeper.start()
    logger.info("Catalog API started")

@app.on_event("shutdown")
async def shutdown_event():
    sweeper.stop()

@app.get("/")
async def root():
    return {"message": "Library catalog search"}

# Main execution
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_dirs=["api", "catalog"]
    )
