class CartError(Exception):
    """Базовая ошибка корзины"""


class MissingName(CartError):
    """У сущности нет ни get_name(), ни атрибута name"""

    def __init__(self, source_type: str):
        self.source_type = source_type
        super().__init__(f"Name of the cart item of type '{source_type}' could not be resolved")


class MissingPrice(CartError):
    """У сущности нет ни get_price(), ни атрибута price"""

    def __init__(self, source_type: str):
        self.source_type = source_type
        super().__init__(f"Price of the cart item of type '{source_type}' could not be resolved")


class IndexOutOfRange(CartError, IndexError):
    """Позиция корзины с таким индексом не существует"""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Cart item index {index} is out of range (cart has {size} items)")


class NegativePrice(CartError):
    """Цена сущности меньше нуля"""

    def __init__(self, source_type: str, price):
        self.source_type = source_type
        self.price = price
        super().__init__(f"Price of the cart item of type '{source_type}' must not be negative, got {price}")


class CartRecordNotFound(CartError, LookupError):
    """Запись корзины исчезла из хранилища"""

    def __init__(self, entity: str, record_id):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found in storage")
