from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from ...dependencies import get_current_user, get_user_repository
from ....models.user import User
from ....news.services.preferences import NEWS_CATEGORIES, SUPPORTED_LANGUAGES
from ....repositories.user_repository import InMemoryUserRepository

router = APIRouter()


class PreferencesResponse(BaseModel):
    categories: List[str] = []
    languages: List[str] = []


class UpdatePreferencesRequest(BaseModel):
    categories: Optional[List[str]] = None
    languages: Optional[List[str]] = None

    @field_validator("categories")
    @classmethod
    def validate_categories(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        normalized = [category.lower() for category in value]
        for category in normalized:
            if category not in NEWS_CATEGORIES:
                raise ValueError(
                    f"Invalid category: {category}. Valid categories are: {', '.join(NEWS_CATEGORIES)}"
                )
        return normalized

    @field_validator("languages")
    @classmethod
    def validate_languages(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        normalized = [language.lower() for language in value]
        for language in normalized:
            if language not in SUPPORTED_LANGUAGES:
                raise ValueError(
                    f"Invalid language: {language}. Valid languages are: {', '.join(SUPPORTED_LANGUAGES)}"
                )
        return normalized


@router.get("", response_model=PreferencesResponse)
async def get_preferences(user: User = Depends(get_current_user)):
    return PreferencesResponse(
        categories=user.preferences.categories,
        languages=user.preferences.languages,
    )


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    request: UpdatePreferencesRequest,
    user: User = Depends(get_current_user),
    users: InMemoryUserRepository = Depends(get_user_repository)
):
    preferences = users.update_preferences(
        user.id,
        categories=request.categories,
        languages=request.languages,
    )
    return PreferencesResponse(categories=preferences.categories, languages=preferences.languages)
