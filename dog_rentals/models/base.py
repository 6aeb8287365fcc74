from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Listings, rental requests, rentals and notifications are independent
    collections: there are no foreign keys between them, and cross-entity
    consistency is maintained by the lifecycle services.
    """

    pass
