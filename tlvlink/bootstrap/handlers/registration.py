from tlvlink.bootstrap.deps import get_app, get_registrations
from tlvlink.core.models.message import Message, MessageType


app = get_app()


@app.request(MessageType.NEW_REGISTRATION)
async def register(message: Message) -> Message:
    return await get_registrations().register(message)


@app.request(MessageType.LIST_REGISTRATIONS)
async def list_registrations(message: Message) -> Message:
    return await get_registrations().list_names(message)
