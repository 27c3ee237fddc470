# classbook/db/models/topic.py
from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from classbook.db.base import Base


class Topic(Base):
    __tablename__ = "topics"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    grade_id = Column(Integer, ForeignKey("grades.id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=True, index=True)
    display_order = Column(Integer, default=0, nullable=False)

    grade = relationship("Grade", back_populates="topics")
    criteria = relationship("Criterion", back_populates="topic", cascade="all, delete-orphan")


class Criterion(Base):
    __tablename__ = "criteria"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    topic_id = Column(Integer, ForeignKey("topics.id"), nullable=False, index=True)
    display_order = Column(Integer, default=0, nullable=False)

    topic = relationship("Topic", back_populates="criteria")
