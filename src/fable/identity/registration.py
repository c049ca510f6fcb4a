"""Customer registration: command, handler and phone/email lookups."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from fable.domain import fable
from fable.identity.customer import Customer
from fable.utils.logging import get_logger

logger = get_logger(__name__)


@fable.repository(part_of=Customer)
class CustomerRepository:
    def find_by_phone(self, phone):
        customers = self._dao.query.filter(phone=phone.strip()).all().items
        return customers[0] if customers else None

    def find_by_email(self, email):
        customers = self._dao.query.filter(email=email.strip().lower()).all().items
        return customers[0] if customers else None


@fable.command(part_of="Customer")
class RegisterCustomer:
    name = String(required=True, max_length=100)
    phone = String(required=True, max_length=20)
    email = String(max_length=254)


@fable.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        repo = current_domain.repository_for(Customer)

        if repo.find_by_phone(command.phone) is not None:
            raise ValidationError({"phone": ["A customer with this phone number already exists"]})
        if command.email and repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["A customer with this email already exists"]})

        customer = Customer.register(
            name=command.name,
            phone=command.phone,
            email=command.email,
        )
        repo.add(customer)
        logger.info("customer_registered", customer_id=str(customer.id))
        return str(customer.id)
