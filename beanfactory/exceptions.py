"""
BeanFactory Exceptions

Custom exception hierarchy for the beanfactory IoC container
"""

from typing import Optional


class BeansError(Exception):
    """
    Base exception for all beanfactory errors.

    All container-specific exceptions inherit from this class.
    You can catch this to handle any container error generically.

    Attributes:
        bean_id: Id of the bean the error relates to, if known

    Example:
        >>> try:
        ...     service = factory.get_bean("accountService")
        ... except BeansError as e:
        ...     print(f"IoC error: {e}")
    """

    def __init__(self, message: str, bean_id: Optional[str] = None):
        super().__init__(message)
        self.bean_id = bean_id


class BeanDefinitionNotFoundError(BeansError):
    """
    Raised when a requested bean id has no registered definition.

    Common causes:
        - Typo in the bean id
        - The reader that registers the definition was never run
        - A ``RuntimeBeanReference`` pointing at an id that does not exist

    Solution:
        Register a definition before requesting the bean::

            factory.register_bean_definition(
                "accountDao", BeanDefinition("accountDao", "app.dao.AccountDao")
            )
            dao = factory.get_bean("accountDao")

    Note:
        The error message lists the registered bean ids to help
        spot the typo.
    """

    pass


class BeanDefinitionStoreError(BeansError):
    """
    Raised when bean definition records cannot be turned into definitions.

    Common causes:
        - A record without ``id`` or ``class``
        - A scope token other than ``singleton`` or ``prototype``
        - A property or constructor argument with neither ``value`` nor ``ref``
    """

    pass


class ClassResolutionError(BeansError):
    """
    Raised when a definition's declared class name cannot be loaded.

    Common causes:
        - The class name is not a fully qualified dotted path
        - The module cannot be imported
        - The module has no attribute with that name, or it is not a class

    Solution:
        Use the full import path of the class::

            BeanDefinition("accountDao", "app.dao.AccountDao")
    """

    pass


class ConversionError(BeansError):
    """
    Raised when a value cannot be converted to the type a slot declares.

    Example::

        class Pool:
            def __init__(self, size: int):
                self.size = size

        # "many" cannot become an int -> ConversionError
        bd.constructor_argument_values.append(TypedStringValue("many"))

    Attributes:
        value: The value that failed to convert
        required_type: The declared type of the destination slot
    """

    def __init__(self, message: str, value=None, required_type=None):
        super().__init__(message)
        self.value = value
        self.required_type = required_type


class BeanCreationError(BeansError):
    """
    Raised when a bean cannot be instantiated or populated.

    This is the umbrella error for ``get_bean`` failures. The underlying
    cause is chained (``__cause__``) so the full story is visible in the
    traceback.

    Common causes:
        - The class has no zero-argument constructor and no constructor
          arguments were declared
        - A property value could not be converted
        - A referenced bean could not be created
        - A post-processor raised
    """

    pass


class ConstructorResolutionError(BeanCreationError):
    """
    Raised when no constructor matches the declared constructor arguments,
    or when invoking the matching constructor fails.

    Common causes:
        - Declaring more (or fewer) arguments than ``__init__`` accepts
        - An argument literal that cannot be converted to the annotated
          parameter type
        - ``__init__`` itself raising
    """

    pass


class CircularDependencyError(BeanCreationError):
    """
    Raised when a bean (directly or indirectly) references itself.

    Example of circular dependency::

        beanA.partner -> ref(beanB)
        beanB.partner -> ref(beanA)   # Circular!

    Solution:
        1. Remove one of the references
        2. Look the other bean up lazily at call time instead
        3. Extract the shared state into a third bean both reference
    """

    pass


class ContainerClosedError(BeansError):
    """
    Raised when using a ``BeanFactory`` after ``close()``.

    Solution:
        Create a new factory instead of reusing a closed one.
    """

    pass
