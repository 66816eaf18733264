"""
Commands - CLI command implementations for the Squiggle client.

- initialize: one-time contract setup (mint price)
- mint:       pay and mint a token
- query:      info, balance, owner, token-uri
- manage:     transfer, approve, approve-all
"""
