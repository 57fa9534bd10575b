"""
Balance Manager client package.

Client-side tooling for the Solana balance account program: address
derivation, instruction encoding, transaction submission and account reads.
"""

__version__ = '1.0.0'
