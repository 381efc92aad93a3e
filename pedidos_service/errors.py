"""
errors.py — Error Taxonomy for the Pedidos Service

    - InvalidRequest: malformed order payload (HTTP 400)
    - ProductNotFound: unknown product id, in a lookup or inside an order (HTTP 404)
    - SecretUnavailable: a required secret could not be fetched at startup (fatal)
"""


class PedidosError(Exception):
    """Base class for every error raised by the service."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(PedidosError):
    status_code = 400

    def __init__(self, message: str = "Datos de pedido inválidos. Se requiere 'cliente' y un array de 'productos'."):
        super().__init__(message)


class ProductNotFound(PedidosError):
    """
    Raised for a product id that is not in the catalog.

    Attributes:
        product_id: The offending id, exactly as received.
    """
    status_code = 404

    def __init__(self, product_id, message: str = None):
        super().__init__(message or f"El producto con id {product_id} no fue encontrado.")
        self.product_id = product_id


class SecretUnavailable(PedidosError):
    def __init__(self, secret_name: str, cause: Exception = None):
        super().__init__(f"No se pudo cargar el secreto '{secret_name}': {cause}")
        self.secret_name = secret_name
        self.cause = cause
