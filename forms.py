from flask import current_app
from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed
from wtforms import (
    StringField,
    SelectField,
    SubmitField,
    TextAreaField,
)
from wtforms.validators import (
    DataRequired,
    Length,
    ValidationError,
    Optional,
    URL,
)
from models.activity import ActivityCategory

MIN_DESCRIPTION_LENGTH = 50
IMAGE_EXTENSIONS = ["png", "jpg", "jpeg", "gif", "webp"]


class LoginForm(FlaskForm):
    name = StringField("Full Name", validators=[DataRequired(), Length(max=200)])
    intern_id = StringField("Intern ID", validators=[DataRequired(), Length(max=64)])
    submit = SubmitField("Sign In")


class ActivityForm(FlaskForm):
    """Form for logging the day's work."""

    hours = SelectField(
        "Working Duration",
        choices=[(2, "2 Hours (Minimal)"), (3, "3+ Hours (Standard)")],
        coerce=int,
        default=3,
    )
    category = SelectField(
        "Work Classification",
        choices=ActivityCategory.choices(),
        default=ActivityCategory.LEARNING.value,
    )
    description = TextAreaField(
        "Achievement Summary",
        validators=[
            DataRequired(message="Please describe what you worked on today"),
            Length(max=5000),
        ],
    )
    proof_url = StringField(
        "Proof Link",
        validators=[Optional(), URL(message="Please enter a valid URL")],
    )
    proof_image = FileField(
        "Proof Image",
        validators=[Optional(), FileAllowed(IMAGE_EXTENSIONS, "Images only")],
    )
    submit = SubmitField("Submit Official Record")

    def validate_description(self, description):
        if len(description.data.strip()) < MIN_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters long."
            )

    def validate_proof_image(self, proof_image):
        upload = proof_image.data
        if not upload or not getattr(upload, "filename", ""):
            return
        upload.stream.seek(0, 2)
        size = upload.stream.tell()
        upload.stream.seek(0)
        if size > current_app.config["MAX_PROOF_IMAGE_BYTES"]:
            raise ValidationError("Image size too large. Please use an image under 2MB.")
