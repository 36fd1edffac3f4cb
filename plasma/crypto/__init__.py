"""
plasma.crypto: embedded-curve primitives.

- `field`     BN254 scalar field element and modular helpers
- `jubjub`    twisted Edwards curve parameters and group law
- `sigcodec`  flat (r_x, r_y, s) ⇄ curve-native signature conversion
- `eddsa`     signature verification and the reference signer

Submodules are imported explicitly by callers; this package does not
re-export them to keep import order independent of `plasma.config`.
"""
