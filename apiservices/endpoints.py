from apiservices.settings import AUTH_URL
from apiservices.structures import EndpointDescriptor

GET_CUSTOMERS = EndpointDescriptor(
    name="getCustomers",
    base_url=AUTH_URL,
    path="/api/customers/{customerId}",
    method="GET",
    prefer="example=populated",
)

GET_CUSTOMER_PROFILE = EndpointDescriptor(
    name="getCustomerProfile",
    base_url=AUTH_URL,
    path="/api/customers/{customerId}/location/{locationId}",
    method="GET",
    prefer="example={customerId}",
)

EDIT_CUSTOMER_PROFILE = EndpointDescriptor(
    name="editCustomerProfile",
    base_url=AUTH_URL,
    path="/api/customers/{customerId}",
    method="PATCH",
    prefer="example={customerId}",
)

LOG_IN = EndpointDescriptor(
    name="logIn",
    base_url=AUTH_URL,
    path="/api/login",
    method="POST",
    uses_access_token=False,
    uses_id_token=False,
)

LOG_OUT = EndpointDescriptor(
    name="logOut",
    base_url=AUTH_URL,
    path="/api/logout",
    method="POST",
)

REQUEST_PASSWORD_RESET = EndpointDescriptor(
    name="requestPasswordReset",
    base_url=AUTH_URL,
    path="/api/password-reset/request",
    method="POST",
    uses_access_token=False,
    uses_id_token=False,
    accept_type="text",
)

RESET_PASSWORD = EndpointDescriptor(
    name="resetPassword",
    base_url=AUTH_URL,
    path="/api/password-reset/confirm",
    method="POST",
    uses_access_token=False,
    uses_id_token=False,
    accept_type="text",
)


ENDPOINTS: list[EndpointDescriptor] = [
    GET_CUSTOMERS,
    GET_CUSTOMER_PROFILE,
    EDIT_CUSTOMER_PROFILE,
    LOG_IN,
    LOG_OUT,
    REQUEST_PASSWORD_RESET,
    RESET_PASSWORD,
]

_BY_NAME = {ep.name: ep for ep in ENDPOINTS}


def get_endpoint(name: str) -> EndpointDescriptor:
    return _BY_NAME[name]
