import uvicorn

from odds_gpt.config import settings
from odds_gpt.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
