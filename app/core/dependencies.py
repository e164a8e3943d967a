from fastapi import Request

from app.storage.base import IStorage


def get_storage(request: Request) -> IStorage:
    """Хранилище, созданное на старте приложения. Инжектируется в эндпоинты через Depends."""
    return request.app.state.storage
