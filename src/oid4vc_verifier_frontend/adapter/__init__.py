"""Adapter layer - Infrastructure implementations"""

from oid4vc_verifier_frontend.adapter.output import *
