# ============================================================================
# FILE: mixtape/__main__.py
# ============================================================================
import uvicorn
from mixtape.config import Settings


def main() -> None:
    """Serve the API with uvicorn (python -m mixtape)"""
    settings = Settings()
    uvicorn.run("mixtape.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=settings.DEBUG)


if __name__ == "__main__":
    main()
