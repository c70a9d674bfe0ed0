from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

import models  # noqa: F401  註冊 tables 到 Base.metadata
from database import Base, engine, settings
from api import rooms, members, deposits


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: 設定 log level，建立資料庫表
    logging.basicConfig(level=settings.log_level.upper())
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="Deposit Rooms API",
    description="Ledger-backed deposit rooms that activate once four participants have joined",
    version="1.0.0",
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this properly in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(rooms.router)
app.include_router(members.router)
app.include_router(deposits.router)


@app.get("/")
def root():
    return {"message": "Deposit Rooms API", "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
