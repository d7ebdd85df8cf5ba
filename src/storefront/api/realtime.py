"""WebSocket endpoint for real-time order status updates.

Protocol (JSON text frames):

    client → {"event": "subscribeToOrder", "orderId": "...", "userId": "..."}
    server → {"event": "subscribed", "data": {"orderId": "...", "userId": "..."}}
    server → {"event": "orderStatusUpdated", "data": {"orderId": "...", "status": "..."}}

Status events are emitted from whatever thread processed the command, so
each connection owns a queue that is only ever filled on the connection's
own event loop.
"""

import asyncio

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from storefront.notifications.realtime.fanout import StatusFanout
from storefront.notifications.realtime.registry import RegistryClosedError
from storefront.notifications.realtime.subscriber_port import SubscriberPort

logger = structlog.get_logger(__name__)

SUBSCRIBE_EVENT = "subscribeToOrder"
SUBSCRIBED_EVENT = "subscribed"
ERROR_EVENT = "error"

realtime_router = APIRouter(tags=["realtime"])


class WebSocketSubscriber(SubscriberPort):
    def __init__(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop
        self._open = True
        self.queue: asyncio.Queue = asyncio.Queue()

    def deliver(self, event_name: str, payload: dict) -> None:
        if not self._open or self._loop.is_closed():
            raise ConnectionError("WebSocket connection is closed")
        self._loop.call_soon_threadsafe(self.queue.put_nowait, {"event": event_name, "data": payload})

    def reply(self, event_name: str, payload: dict) -> None:
        """Queue a message from the connection's own loop."""
        self.queue.put_nowait({"event": event_name, "data": payload})

    def close(self) -> None:
        self._open = False


async def _forward(websocket: WebSocket, subscriber: WebSocketSubscriber) -> None:
    while True:
        message = await subscriber.queue.get()
        await websocket.send_json(message)


def _handle_message(fanout: StatusFanout, subscriber: WebSocketSubscriber, message) -> None:
    if not isinstance(message, dict) or message.get("event") != SUBSCRIBE_EVENT:
        subscriber.reply(ERROR_EVENT, {"message": "Unsupported event"})
        return

    order_id = message.get("orderId")
    user_id = message.get("userId")
    if not order_id or not user_id:
        subscriber.reply(ERROR_EVENT, {"message": "orderId and userId are required"})
        return

    fanout.subscribe(order_id=str(order_id), user_id=str(user_id), subscriber=subscriber)
    subscriber.reply(SUBSCRIBED_EVENT, {"orderId": str(order_id), "userId": str(user_id)})


@realtime_router.websocket("/ws/orders")
async def order_updates(websocket: WebSocket):
    fanout: StatusFanout = websocket.app.state.fanout
    await websocket.accept()

    subscriber = WebSocketSubscriber(asyncio.get_running_loop())
    sender = asyncio.create_task(_forward(websocket, subscriber))
    try:
        while True:
            message = await websocket.receive_json()
            _handle_message(fanout, subscriber, message)
    except WebSocketDisconnect:
        logger.debug("Real-time client disconnected")
    except RegistryClosedError:
        logger.info("Real-time subscriptions are closed, dropping connection")
        await websocket.close(code=1001)
    finally:
        subscriber.close()
        fanout.unsubscribe(subscriber)
        sender.cancel()
