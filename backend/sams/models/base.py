"""Declarative base shared by every SAMS table."""
import enum
from datetime import datetime, date
from typing import Any, Dict, Iterable, Optional
from sams import db


class BaseModel(db.Model):
    """Integer primary key, audit timestamps and persistence shortcuts."""

    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def save(self) -> 'BaseModel':
        """Add and commit."""
        db.session.add(self)
        db.session.commit()
        return self

    def delete(self) -> None:
        db.session.delete(self)
        db.session.commit()

    def update(self, **changes) -> 'BaseModel':
        """Apply column changes and commit; unknown keys are ignored."""
        columns = self.column_names()
        for key, value in changes.items():
            if key in columns:
                setattr(self, key, value)

        self.updated_at = datetime.utcnow()
        db.session.commit()
        return self

    @classmethod
    def column_names(cls) -> set:
        return {column.name for column in cls.__table__.columns}

    @staticmethod
    def _json_value(value: Any) -> Any:
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, enum.Enum):
            return value.value
        return value

    def to_dict(self, exclude: Iterable[str] = None) -> Dict[str, Any]:
        """Column values keyed by snake_case column name, JSON ready."""
        skipped = set(exclude or ())
        return {
            column.name: self._json_value(getattr(self, column.name))
            for column in self.__table__.columns
            if column.name not in skipped
        }

    @classmethod
    def get_by_id(cls, id: int) -> Optional['BaseModel']:
        return db.session.get(cls, id)

    @classmethod
    def get_or_404(cls, id: int) -> 'BaseModel':
        """Fetch by primary key or abort with ``<Model> not found``."""
        return db.get_or_404(cls, id, description=f'{cls.__name__} not found')

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.id}>'
