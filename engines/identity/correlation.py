"""
Correlation key codec.

Rekognition external image IDs may not contain "@", so a contact address is
stored on the provider side with "@" spelled as "AT". The address is
lower-cased first, which leaves the inserted "AT" as the only upper-case
pair in the key and makes decode exact for lower-case addresses.
"""

AT_SIGN = '@'
AT_TOKEN = 'AT'


def encode(contact_address: str) -> str:
    """Contact address -> provider external reference."""
    return contact_address.lower().replace(AT_SIGN, AT_TOKEN)


def decode(external_reference: str) -> str:
    """Provider external reference -> contact address."""
    return external_reference.replace(AT_TOKEN, AT_SIGN)
