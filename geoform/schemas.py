from typing import Dict, List, Optional
from pydantic import BaseModel

class AddressComponent(BaseModel):
    long_name: str
    short_name: Optional[str] = None
    types: List[str] = []

class GeocodeResult(BaseModel):
    address_components: List[AddressComponent]
    postcode_localities: Optional[List[str]] = None
    formatted_address: Optional[str] = None

class HiddenField(BaseModel):
    name: str
    value: str

class LookupResponse(BaseModel):
    status: str
    message: Optional[str] = None
    cities: List[str] = []
    city: Optional[str] = None
    fields: List[HiddenField] = []
    submit_enabled: bool = False
    areas: Dict[str, Dict[str, str]] = {}

class SubmitRequest(BaseModel):
    country: str
    zipcode: str
    city: str

class SubmitResponse(BaseModel):
    city: str
    fields: List[HiddenField]
