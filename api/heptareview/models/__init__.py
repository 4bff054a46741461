"""
Models package - imports all models so they register with SQLModel.
"""
from heptareview.models.card import Card
from heptareview.models.review import Review
from heptareview.models.subject import Subject

__all__ = [
    'Card',
    'Review',
    'Subject',
]
