"""Port layer - Interfaces between domain and adapters

This layer defines the contracts (interfaces) that adapters must implement.
It separates the transaction orchestration from external concerns.

Input Ports (Use Cases):
- InitTransaction: Start a presentation transaction with the verifier backend
- GetWalletResponse: Retrieve and verify the wallet's response

Output Ports (External Dependencies):
- Session: Per-transaction state storage
- HttpClient: Verifier backend calls
- EphemeralKeyGenerator / JarmVerifier: JOSE operations
- MdocVerifier: Credential verification
- Generators: Nonce, presentation definition, URLs, device classification
- QrCodeService: QR code generation
"""

from oid4vc_verifier_frontend.port.input import *
from oid4vc_verifier_frontend.port.output import *
