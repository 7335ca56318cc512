"""A Task is a unit of work inside a Project.

A Task always belongs to a Project
A Task removed from its Project is deleted
A Task can be completed and reopened

"""
from __future__ import annotations

from datetime import datetime

from database import db
from models.mixins import AuditMixin
from utils.rendering import render_description_html


class Task(AuditMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)
    completed = db.Column(db.Boolean, default=False, nullable=False)
    completed_date = db.Column(db.DateTime, nullable=True)
    project_id = db.Column(db.Integer, db.ForeignKey("project.id"), nullable=False, index=True)

    project = db.relationship("Project", overlaps="tasks")

    def complete_task(self):
        self.completed = True
        if self.completed_date is None:
            self.completed_date = datetime.utcnow()

    def uncomplete_task(self):
        self.completed = False
        self.completed_date = None

    @property
    def description_html(self):
        return render_description_html(self.description)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "description_html": str(self.description_html),
            "completed": bool(self.completed),
            "completed_date": self.completed_date.isoformat() if self.completed_date else None,
        }

    def __repr__(self):
        return f"<Task {self.name}>"
