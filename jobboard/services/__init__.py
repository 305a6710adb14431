from .ai_service import CareerAIService, AIServiceError, ModelOutputError, get_ai_service

__all__ = [
    'CareerAIService',
    'AIServiceError',
    'ModelOutputError',
    'get_ai_service'
]
