from app.features.auth.models.company import Company, SubscriptionStatus

__all__ = ["Company", "SubscriptionStatus"]
