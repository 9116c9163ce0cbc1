"""User-agent based device classification"""

from user_agents import parse


def default_is_mobile(user_agent: str) -> bool:
    """
    Whether the user agent belongs to a mobile phone.

    Tablets and desktops are not mobile: the wallet is expected on a separate
    phone and reached through a QR code.
    """
    if not user_agent:
        return False
    device = parse(user_agent)
    return device.is_mobile and not device.is_tablet
