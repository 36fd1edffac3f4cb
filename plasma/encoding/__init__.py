"""
plasma.encoding: bit-level layouts shared with the circuit.

- `bits`       fixed-width LE integers and MSB-first byte packing
- `floatpack`  lossy mantissa/exponent amount codec
- `message`    canonical signed transfer message
"""
