"""
cert_decoder — X.509 certificate decoder.

Unwraps a PEM-armored certificate, walks its DER structure by hand and
renders version, serial, algorithms, names, validity and the common v3
extensions as a CertificateInfo.

Built on the Railway-Oriented Programming (ROP) framework for
explicit, composable, functional error handling.
"""

__version__ = "0.1.0"
