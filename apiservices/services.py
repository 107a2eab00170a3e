from apiservices import endpoints
from apiservices.serviceFactory import create_service

get_customers = create_service(endpoints.GET_CUSTOMERS)
get_customer_profile = create_service(endpoints.GET_CUSTOMER_PROFILE)
edit_customer_profile = create_service(endpoints.EDIT_CUSTOMER_PROFILE)
log_in = create_service(endpoints.LOG_IN)
log_out = create_service(endpoints.LOG_OUT)
request_password_reset = create_service(endpoints.REQUEST_PASSWORD_RESET)
reset_password = create_service(endpoints.RESET_PASSWORD)
