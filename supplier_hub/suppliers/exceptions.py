class RelationshipError(Exception):
    """Base class for relationship store errors."""


class DuplicateRelationship(RelationshipError):
    def __init__(self, product_id, supplier_id):
        self.product_id = product_id
        self.supplier_id = supplier_id
        super().__init__(f"Supplier #{supplier_id} is already assigned to product #{product_id}")


class TransactionFailure(RelationshipError):
    """A multi-statement relationship update could not be completed and was rolled back."""
