from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from quizmaster.config import settings
from quizmaster.routes import attempts, quizzes, results
from quizmaster.utils.logging_config import configure_logging

configure_logging()

app = FastAPI(title=settings.app_name, version="1.0.0", description="API for building, publishing and taking quizzes")

# CORS middleware for cross-origin requests (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with prefixes and tags
app.include_router(quizzes.router, prefix="/quizzes", tags=["Quizzes"])
app.include_router(attempts.router, prefix="/quizzes", tags=["Quiz Attempts"])
app.include_router(results.router, prefix="/quizzes", tags=["Results"])

# Root endpoint
@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.app_name}", "version": app.version}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("quizmaster.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
