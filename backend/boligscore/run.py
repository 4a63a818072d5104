import uvicorn

from boligscore.core.config import settings

def main():
    """
    Run the FastAPI application using uvicorn
    """
    uvicorn.run(
        "boligscore.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
    )

if __name__ == "__main__":
    main()
