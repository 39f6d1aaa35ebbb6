from app.ai_core.completion.completion_gateway import CompletionGateway

__all__ = ["CompletionGateway"]
