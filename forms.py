from flask_wtf import FlaskForm
from wtforms import (
    BooleanField,
    FieldList,
    Form,
    FormField,
    IntegerField,
    PasswordField,
    StringField,
    TextAreaField,
)
from wtforms.validators import DataRequired, Length, Optional, StopValidation


def json_text(message="Must be a string."):
    """Stop the chain when a JSON payload supplied a non-string value."""

    def _json_text(form, field):
        if field.data is not None and not isinstance(field.data, str):
            raise StopValidation(message)

    return _json_text


class LoginForm(FlaskForm):
    username = StringField("Username", [DataRequired()])
    password = PasswordField("Password", [DataRequired()])


class TaskEntryForm(Form):
    """A single task inside the ``tasks`` list of a project payload."""

    id = IntegerField("Id", validators=[Optional()])
    name = StringField(
        "Name",
        validators=[
            json_text("Task name must be a string."),
            DataRequired(message="Task name is required."),
        ],
    )
    description = TextAreaField(
        "Description",
        validators=[json_text("Task description must be a string."), Optional()],
    )
    completed = BooleanField("Completed", default=False)


class ProjectForm(FlaskForm):
    """Writable fields of a project (the ``project_write`` field group)."""

    name = StringField(
        "Name",
        validators=[
            json_text("Name must be a string."),
            DataRequired(message="Name is required."),
            Length(max=255, message="Name must be 255 characters or fewer."),
        ],
    )
    description = TextAreaField(
        "Description",
        validators=[json_text("Description must be a string."), Optional()],
    )
    client_id = IntegerField("Client", validators=[DataRequired(message="A client is required.")])
    status_id = IntegerField("Status", validators=[DataRequired(message="A status is required.")])
    type_id = IntegerField("Type", validators=[DataRequired(message="A type is required.")])
    is_active = BooleanField("Active", default=True)
    tasks = FieldList(FormField(TaskEntryForm))
