import uvicorn

from cms_api.core.config import settings
from cms_api.main import create_app

if __name__ == "__main__":
    uvicorn.run(create_app(settings), host=settings.API_HOST, port=settings.API_PORT)
