"""plasma.circuit: projections of transactions into circuit witness form."""
