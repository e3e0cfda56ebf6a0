"""FastAPI dependency injection factories."""

from typing import Annotated

from fastapi import Depends
from langchain_core.language_models import BaseChatModel

from fridge_check.agents.llm import get_llm
from fridge_check.core.config import Settings, get_settings
from fridge_check.core.exceptions import ConfigurationError
from fridge_check.services.analysis import AnalysisService


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_chat_model(settings: SettingsDep) -> BaseChatModel:
    """
    Get the upstream chat model for the configured provider.

    Args:
        settings: Injected application settings

    Returns:
        Chat model instance

    Raises:
        ConfigurationError: If the selected provider has no API key
    """
    if not settings.is_llm_configured:
        raise ConfigurationError()
    return get_llm(settings)


def get_analysis_service(
    settings: SettingsDep,
    llm: BaseChatModel = Depends(get_chat_model),
) -> AnalysisService:
    """
    Get AnalysisService instance.

    Args:
        settings: Injected application settings
        llm: Injected chat model

    Returns:
        AnalysisService instance
    """
    return AnalysisService(llm, settings)


AnalysisServiceDep = Annotated[AnalysisService, Depends(get_analysis_service)]
