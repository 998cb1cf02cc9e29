"""ABA routing transit number checksum."""

__all__ = ['is_valid_routing_number']

WEIGHTS = (3, 7, 1, 3, 7, 1, 3, 7, 1)


def is_valid_routing_number(routing_number):
    if not isinstance(routing_number, str):
        return False
    if len(routing_number) != 9 or not (
        routing_number.isascii() and routing_number.isdigit()
    ):
        return False
    total = sum(
        weight * int(digit) for weight, digit in zip(WEIGHTS, routing_number)
    )
    return total % 10 == 0
