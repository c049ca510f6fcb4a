"""FastAPI endpoints for registration and the customer's address book."""

from fastapi import APIRouter, Depends, Response
from protean.utils.globals import current_domain

from fable.api.auth import CUSTOMER_COOKIE, current_customer_id, set_session_cookie
from fable.api.schemas import (
    AddAddressRequest,
    AddressIdResponse,
    AddressResponse,
    CustomerSessionResponse,
    ProfileResponse,
    RegisterCustomerRequest,
    StatusResponse,
    UpdateAddressRequest,
)
from fable.identity.addresses import AddAddress, RemoveAddress, UpdateAddress
from fable.identity.customer import Customer
from fable.identity.registration import RegisterCustomer
from fable.identity.session import CUSTOMER_ROLE, issue_token

customer_router = APIRouter(prefix="/customers", tags=["customers"])
profile_router = APIRouter(prefix="/profile", tags=["profile"])


@customer_router.post("", status_code=201, response_model=CustomerSessionResponse)
async def register_customer(body: RegisterCustomerRequest, response: Response) -> CustomerSessionResponse:
    command = RegisterCustomer(name=body.name, phone=body.phone, email=body.email)
    customer_id = current_domain.process(command, asynchronous=False)

    token = issue_token(customer_id, role=CUSTOMER_ROLE)
    set_session_cookie(response, CUSTOMER_COOKIE, token)
    return CustomerSessionResponse(customer_id=customer_id, token=token)


@profile_router.get("", response_model=ProfileResponse)
async def my_profile(customer_id: str = Depends(current_customer_id)) -> ProfileResponse:
    customer = current_domain.repository_for(Customer).get(customer_id)
    return ProfileResponse.from_customer(customer)


@profile_router.get("/addresses", response_model=list[AddressResponse])
async def my_addresses(customer_id: str = Depends(current_customer_id)) -> list[AddressResponse]:
    customer = current_domain.repository_for(Customer).get(customer_id)
    return ProfileResponse.from_customer(customer).addresses


@profile_router.post("/addresses", status_code=201, response_model=AddressIdResponse)
async def add_address(body: AddAddressRequest, customer_id: str = Depends(current_customer_id)) -> AddressIdResponse:
    command = AddAddress(customer_id=customer_id, **body.model_dump(exclude_none=True))
    address_id = current_domain.process(command, asynchronous=False)
    return AddressIdResponse(address_id=address_id)


@profile_router.put("/addresses/{address_id}", response_model=StatusResponse)
async def update_address(
    address_id: str, body: UpdateAddressRequest, customer_id: str = Depends(current_customer_id)
) -> StatusResponse:
    command = UpdateAddress(customer_id=customer_id, address_id=address_id, **body.changes())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@profile_router.delete("/addresses/{address_id}", response_model=StatusResponse)
async def remove_address(address_id: str, customer_id: str = Depends(current_customer_id)) -> StatusResponse:
    command = RemoveAddress(customer_id=customer_id, address_id=address_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
