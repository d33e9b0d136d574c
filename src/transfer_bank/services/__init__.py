from transfer_bank.services.transfers import TransferService

__all__ = ["TransferService"]
