import logging
import threading
from typing import List, Optional

from models import Contact, ContactIn

log = logging.getLogger(__name__)


class ContactStore:
    """In-memory, insertion-ordered collection of contacts.

    Ids come from a counter that starts at 1 and only grows, so an id is
    never handed out twice, even after the contact holding it is deleted.
    All access goes through a single lock: FastAPI runs plain ``def``
    handlers on a thread pool. Records handed back to callers are copies
    taken under that lock, so they never change after being returned.
    """

    def __init__(self):
        self._contacts: List[Contact] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._contacts)

    def create(self, name: str, email: str, phone: str) -> Contact:
        with self._lock:
            contact = Contact(id=self._next_id, name=name, email=email, phone=phone)
            self._next_id += 1
            self._contacts.append(contact)
            result = contact.model_copy()
        log.debug("Created contact %d", result.id)
        return result

    def list(self) -> List[Contact]:
        with self._lock:
            return [contact.model_copy() for contact in self._contacts]

    def find_by_id(self, contact_id: int) -> Optional[Contact]:
        with self._lock:
            contact = self._find(contact_id)
            return contact.model_copy() if contact is not None else None

    def update(self, contact_id: int, patch: ContactIn) -> Optional[Contact]:
        """Apply the truthy fields of ``patch`` to the stored contact in place.

        Empty strings count as "not provided" and keep the current value.
        """
        with self._lock:
            contact = self._find(contact_id)
            if contact is None:
                return None
            contact.name = patch.name or contact.name
            contact.email = patch.email or contact.email
            contact.phone = patch.phone or contact.phone
            result = contact.model_copy()
        log.debug("Updated contact %d", contact_id)
        return result

    def delete(self, contact_id: int) -> bool:
        with self._lock:
            for i, contact in enumerate(self._contacts):
                if contact.id == contact_id:
                    del self._contacts[i]
                    break
            else:
                return False
        log.debug("Deleted contact %d", contact_id)
        return True

    def _find(self, contact_id: int) -> Optional[Contact]:
        # caller holds the lock
        for contact in self._contacts:
            if contact.id == contact_id:
                return contact
        return None
