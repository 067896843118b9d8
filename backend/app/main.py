# backend/app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .database import engine
from . import models
from .api import projects, documents

# Create all tables on startup
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="Product Blueprint API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify your actual frontend URL
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Type", "Content-Length", "Content-Disposition"],
)

# Include routers
app.include_router(projects.router)
app.include_router(documents.router)

@app.get("/")
async def root():
    return {"message": "Product Blueprint API is running"}
