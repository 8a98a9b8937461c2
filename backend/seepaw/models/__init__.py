"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Shelter owns animals and the activity calendar; Animal owns images, fosterings,
      ownership requests, activities, favorites

Design Decisions:
    - One file per entity for locality (ADR: max 3-4 files to understand a feature)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from seepaw.models.shelter import Shelter  # noqa: F401
from seepaw.models.breed import Breed  # noqa: F401
from seepaw.models.user import User  # noqa: F401
from seepaw.models.animal import Animal  # noqa: F401
from seepaw.models.image import Image  # noqa: F401
from seepaw.models.ownership_request import OwnershipRequest  # noqa: F401
from seepaw.models.activity import Activity  # noqa: F401
from seepaw.models.activity_slot import ActivitySlot  # noqa: F401
from seepaw.models.fostering import Fostering  # noqa: F401
from seepaw.models.favorite import Favorite  # noqa: F401
from seepaw.models.notification import Notification  # noqa: F401
