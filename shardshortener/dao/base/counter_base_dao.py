"""Abstract base class for global counter data access objects (DAOs).

A counter DAO is the sequence generator behind every shortcode. Each call to
`next()` must hand out a value no other caller ever receives, no matter how
many processes call it concurrently. Implementations delegate that guarantee
to an atomic increment in the underlying store; they never cache, batch or
fabricate values locally.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shardshortener.dao.redis import CounterRedisDAO

        >>> counter = CounterRedisDAO(redis_url='redis://localhost:6379/0')
        >>> counter.next()
        1
        >>> counter.next()
        2
        >>> counter.current()
        2
"""

from abc import ABC, abstractmethod


class CounterBaseDAO(ABC):
    """Interface for global counter data access objects (DAOs).

    Methods:
        next(**kwargs) -> int:
            Atomically increment the counter by 1 and return the new value.
            Raises CounterUnavailableError when the store can't be reached.

        current(**kwargs) -> int:
            Return the counter value without incrementing it (0 if never used).
            Raises CounterUnavailableError when the store can't be reached.

    Subclassing:
        Datastore-specific implementations (e.g., CounterRedisDAO) must extend
        this class and implement all abstract methods.
    """

    @abstractmethod
    def next(self, **kwargs) -> int:
        """Issue the next counter value.

        Under C concurrent callers the C returned values are pairwise distinct
        and form a contiguous range right after the previous value.

        Returns:
            int: The incremented counter value.

        Raises:
            CounterUnavailableError:
                If the counter store is unreachable. No value was issued.
        """
        pass

    @abstractmethod
    def current(self, **kwargs) -> int:
        """Return the last issued counter value.

        Returns:
            int: The current counter value, 0 if nothing was issued yet.

        Raises:
            CounterUnavailableError:
                If the counter store is unreachable.
        """
        pass
