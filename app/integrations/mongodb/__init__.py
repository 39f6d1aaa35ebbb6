# MongoDB integration module
from app.integrations.mongodb.client import MongoStore
from app.integrations.mongodb.repository import KnowledgeRepository

__all__ = ["MongoStore", "KnowledgeRepository"]
