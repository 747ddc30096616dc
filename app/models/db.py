# app/models/db.py
from tortoise import fields
from tortoise.models import Model

from app.schemas.buyer import BHK, City, PropertyType, Purpose, Source, Status, Timeline


class User(Model):
    id = fields.IntField(pk=True)
    clerk_id = fields.CharField(max_length=255, unique=True)
    email = fields.CharField(max_length=255, null=True)
    created_at = fields.DatetimeField(auto_now_add=True)


class Buyer(Model):
    id = fields.UUIDField(pk=True)
    full_name = fields.CharField(max_length=80)
    email = fields.CharField(max_length=255, null=True)
    phone = fields.CharField(max_length=15)
    city = fields.CharEnumField(City)
    property_type = fields.CharEnumField(PropertyType)
    bhk = fields.CharEnumField(BHK, null=True)
    purpose = fields.CharEnumField(Purpose)
    budget_min = fields.FloatField(null=True)
    budget_max = fields.FloatField(null=True)
    timeline = fields.CharEnumField(Timeline)
    source = fields.CharEnumField(Source)
    status = fields.CharEnumField(Status, default=Status.NEW)
    notes = fields.TextField(null=True)
    tags = fields.JSONField(default=list)
    owner_id = fields.CharField(max_length=255, index=True)  # Clerk user id of the importing user
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)
