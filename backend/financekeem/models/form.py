"""
Lead capture form model
"""
from sqlalchemy import Column, String, Text, JSON, TIMESTAMP
from ..database import Base


class Form(Base):
    """Form built in the admin and published at /form/<slug>"""

    __tablename__ = "forms"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(250), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    fields = Column(JSON, nullable=False)  # [{id, type, label, required}]
    settings = Column(JSON, nullable=True)
    status = Column(String(20), nullable=False, default="active")  # active, inactive
    created_at = Column(TIMESTAMP, nullable=False)
    updated_at = Column(TIMESTAMP, nullable=False)

    def __repr__(self):
        return f"<Form {self.name} /{self.slug}>"
