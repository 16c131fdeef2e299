from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CustomerDetailsDTO(BaseModel):
    """
    Checkout form fields.

    The structured address (address, city, state, pincode) is flattened into
    a single shipping address string when the order is composed.
    Numbers sent for phone or pincode are taken as their digits.
    """
    model_config = ConfigDict(str_strip_whitespace=True, coerce_numbers_to_str=True)

    name: str = Field(min_length=2)
    email: EmailStr
    phone: str = Field(min_length=10)
    address: str = Field(min_length=10)
    city: str = Field(min_length=2)
    state: str = Field(min_length=2)
    pincode: str = Field(min_length=6)
