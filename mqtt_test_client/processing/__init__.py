from .broker_url import BrokerEndpoint, BrokerUrlError, InsecureBrokerUrlError, parse_broker_url
from .message_parser import generate_test_payload, interpret, parse
