import logging

RED = "\033[91m"
YELLOW = "\033[93m"
GREEN = "\033[92m"
RESET = "\033[0m"
WHITE = "\033[97m"
CYAN = "\033[96m"

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s.%(msecs)03d - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger("petstore.tests")


def log_status(status, message, extra=""):
    status = status.lower()
    color = WHITE  # default

    if status == "error":
        color = RED
    elif status == "warning":
        color = YELLOW
    elif status == "good":
        color = GREEN
    elif status == "step":
        color = CYAN

    if not extra:
        logger.info(f"{color}{message}{RESET}")
    else:
        logger.info(f"{color}{message}{extra}{RESET}")


def log_step(step_name):
    log_status("step", "Step: ", step_name)


def log_data(data_name, data):
    log_status("info", f"Data: {data_name} = ", str(data))


def log_error(message, exc):
    logger.error(f"{RED}Error: {message} - {exc}{RESET}")
