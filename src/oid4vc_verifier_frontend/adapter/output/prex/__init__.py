from oid4vc_verifier_frontend.adapter.output.prex.presentation_definition import (
    MDL_DOCTYPE,
    mdl_presentation_definition,
)

__all__ = ["MDL_DOCTYPE", "mdl_presentation_definition"]
