"""
Test suite for the balance manager client.

Test Categories:
- Layout Tests: account and instruction byte layouts
- Instruction Tests: address derivation and account metas
- Client Tests: RPC wrapper with a mocked cluster
- Service Tests: balance account operations
- CLI Tests: demo sequence and exit codes
"""
