"""
gladiator/database/models.py

Registry of every ORM model.

Importing this module guarantees that `Base.metadata` knows all tables, which
both data stores and table creation rely on:
- profiles
- portfolio_items
- reviews
- professional_ratings
- messages
- transactions
- feedback
"""

from gladiator.database.base import Base
from gladiator.feedback.models import Feedback
from gladiator.messaging.models import Message
from gladiator.payment.models import Transaction
from gladiator.portfolio.models import PortfolioItem
from gladiator.profile.models import Profile
from gladiator.rating.models import ProfessionalRating
from gladiator.review.models import Review

TABLE_MODELS: dict[str, type[Base]] = {
    model.__tablename__: model
    for model in (
        Profile,
        PortfolioItem,
        Review,
        ProfessionalRating,
        Message,
        Transaction,
        Feedback,
    )
}

# ---------------------------------------------------
# Table Names
# ---------------------------------------------------
PROFILES = Profile.__tablename__
PORTFOLIO_ITEMS = PortfolioItem.__tablename__
REVIEWS = Review.__tablename__
PROFESSIONAL_RATINGS = ProfessionalRating.__tablename__
MESSAGES = Message.__tablename__
TRANSACTIONS = Transaction.__tablename__
FEEDBACK = Feedback.__tablename__
