"""Administrator provisioning — command and handler.

Used by the operator CLI; the storefront never creates administrators.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.admin.account import AdminAccount
from identity.domain import identity

logger = structlog.get_logger(__name__)


@identity.command(part_of="AdminAccount")
class RegisterAdmin:
    username: String(required=True, max_length=150)
    password: String(required=True, max_length=255)


@identity.command_handler(part_of=AdminAccount)
class RegisterAdminHandler:
    @handle(RegisterAdmin)
    def register_admin(self, command):
        repo = current_domain.repository_for(AdminAccount)
        existing = repo._dao.query.filter(username=command.username).all().items
        if any(record.username == command.username for record in existing):
            raise ValidationError({"username": ["Username is already taken"]})

        account = AdminAccount.register(username=command.username, password=command.password)
        repo.add(account)
        logger.info("Administrator registered", admin_id=str(account.id), username=account.username)
        return str(account.id)
