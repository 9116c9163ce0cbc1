"""Presentation definitions requested from the wallet"""

from typing import Any, Dict, Iterable

MDL_DOCTYPE = "org.iso.18013.5.1.mDL"
MDL_NAMESPACE = "org.iso.18013.5.1"
MDOC_ALGORITHMS = ["ES256", "ES384", "ES512"]


def mdl_presentation_definition(
    elements: Iterable[str] = ("family_name",),
    definition_id: str = "test-presentation-id",
) -> Dict[str, Any]:
    """
    DIF presentation definition requesting an ISO 18013-5 mobile driving licence.

    Args:
        elements: mDL data elements to request
        definition_id: Presentation definition id

    Returns:
        Presentation definition as a JSON-compatible dict
    """
    fields = [
        {"path": [f"$['{MDL_NAMESPACE}']['{element}']"], "intent_to_retain": False} for element in elements
    ]
    return {
        "id": definition_id,
        "input_descriptors": [
            {
                "id": MDL_DOCTYPE,
                "name": "Mobile Driving Licence",
                "purpose": "We need to verify your mobile driving licence",
                "format": {"mso_mdoc": {"alg": list(MDOC_ALGORITHMS)}},
                "constraints": {"fields": fields},
            }
        ],
    }
