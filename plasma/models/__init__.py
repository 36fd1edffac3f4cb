from plasma.models.tx import DepositTx, ExitTx, TransferTx, TxSignature

__all__ = ["TxSignature", "TransferTx", "DepositTx", "ExitTx"]
