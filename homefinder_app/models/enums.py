from enum import Enum


class UserRole(str, Enum):
    TENANT = "tenant"
    OWNER = "owner"


class PropertyType(str, Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    KOST = "kost"
