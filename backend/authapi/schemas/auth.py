"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate

from authapi.models.user import PASSWORD_MAX_LENGTH, PASSWORD_MIN_LENGTH

from .user import UserSchema


class RegisterSchema(Schema):
    """Input payload for account registration."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(
        required=True,
        validate=validate.Length(min=PASSWORD_MIN_LENGTH, max=PASSWORD_MAX_LENGTH),
    )

    @post_load
    def strip_name(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        data["name"] = data["name"].strip()
        if not data["name"]:
            raise ValidationError("Name must not be blank.", field_name="name")
        return data


class LoginSchema(Schema):
    """Input payload for authenticating a user.

    The password is only required to be present: length rules would let a
    client tell a malformed request apart from a wrong password.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(
        required=True, validate=validate.Length(min=1, max=PASSWORD_MAX_LENGTH)
    )


class TokenResponseSchema(Schema):
    """Response payload of login and refresh."""

    access_token = fields.String(required=True)
    token_type = fields.String(dump_default="bearer")
    expires_in = fields.Integer(required=True)
    user = fields.Nested(UserSchema, required=True)
