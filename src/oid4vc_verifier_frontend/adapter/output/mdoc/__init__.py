from oid4vc_verifier_frontend.adapter.output.mdoc.stub_mdoc_verifier import StubMdocVerifier

__all__ = ["StubMdocVerifier"]
