from __future__ import annotations

import asyncio
import json
from collections import deque
from dataclasses import dataclass
from typing import Dict, Optional, Set

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from loguru import logger

from ..sim.core.config import SimulationConfig
from ..sim.core.evolution import EvolutionLoop
from ..sim.core.rng import DeterministicRng
from ..sim.types.statistics import GenerationStatistics


@dataclass(frozen=True)
class QueuedSnapshot:
    tick: int
    payload: str


class SimulationController:
    def __init__(self, config: SimulationConfig, broadcast_interval: int = 1, ticks_per_frame: int = 1):
        self.config = config
        self.rng = DeterministicRng(config.seed)
        self.loop = EvolutionLoop(config, self.rng)
        self.collisions = self.loop.simulation.collisions.subscribe()
        self.broadcast_interval = max(1, broadcast_interval)
        self.ticks_per_frame = max(1, ticks_per_frame)
        self.running = False
        self.tick = 0
        self.speed_multiplier = 1.0
        self.frame_seconds = 1.0 / 30.0
        self.history: list[GenerationStatistics] = []
        self.clients: Set[WebSocket] = set()
        self._client_last_sent: Dict[WebSocket, int] = {}
        self._snapshot_queue: deque[QueuedSnapshot] = deque()
        self._lock = asyncio.Lock()
        self._queue_lock = asyncio.Lock()
        self._broadcast_task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        if self._broadcast_task is None:
            self._broadcast_task = asyncio.create_task(self._loop())
        self.running = True
        logger.info("[SimulationController] started")

    async def stop(self) -> None:
        self.running = False
        logger.info("[SimulationController] stopped")

    async def reset(self) -> None:
        async with self._lock:
            self.rng.reset()
            self.loop = EvolutionLoop(self.config, self.rng)
            self.collisions = self.loop.simulation.collisions.subscribe()
            self.history.clear()
            self.tick = 0
        async with self._queue_lock:
            self._snapshot_queue.clear()
        for client in self._client_last_sent:
            self._client_last_sent[client] = -1
        await self._broadcast_snapshot()

    def advance(self) -> Optional[GenerationStatistics]:
        finished = None
        for _ in range(self.ticks_per_frame):
            statistics = self.loop.step(self.rng)
            self.tick += 1
            if statistics is not None:
                finished = self.loop.last_statistics
                self.history.append(finished)
        return finished

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.frame_seconds / self.speed_multiplier)
            if not self.running:
                continue
            async with self._lock:
                self.advance()
            if self.tick % self.broadcast_interval == 0:
                await self._broadcast_snapshot()

    async def acknowledge(self, tick: int) -> None:
        async with self._queue_lock:
            while self._snapshot_queue and self._snapshot_queue[0].tick <= tick:
                self._snapshot_queue.popleft()

    def _serialize_snapshot(self) -> QueuedSnapshot:
        snapshot = self.loop.simulation.snapshot(generation=self.loop.generation, age=self.loop.age)
        latest = self.history[-1].as_dict() if self.history else None
        payload = {
            "type": "snapshot",
            "tick": self.tick,
            "payload": {
                **snapshot.as_dict(),
                "collisions": len(self.collisions.drain()),
                "statistics": latest,
            },
        }
        return QueuedSnapshot(tick=self.tick, payload=json.dumps(payload))

    async def _send_pending_snapshots(self, client: WebSocket) -> None:
        last_sent = self._client_last_sent.get(client, -1)
        async with self._queue_lock:
            pending = [item for item in self._snapshot_queue if item.tick > last_sent]
        for item in pending:
            await client.send_text(item.payload)
            last_sent = item.tick
        self._client_last_sent[client] = last_sent

    async def _broadcast_snapshot(self) -> None:
        queued = self._serialize_snapshot()
        async with self._queue_lock:
            self._snapshot_queue.append(queued)
        stale: Set[WebSocket] = set()
        for client in self.clients:
            try:
                await self._send_pending_snapshots(client)
            except WebSocketDisconnect:
                stale.add(client)
        for client in stale:
            self.clients.discard(client)
            self._client_last_sent.pop(client, None)


app = FastAPI(title="Birdlab Evolution")
controller = SimulationController(SimulationConfig())


@app.on_event("startup")
async def _startup() -> None:
    await controller.start()


@app.get("/api/status")
async def status() -> JSONResponse:
    return JSONResponse(
        {
            "running": controller.running,
            "tick": controller.tick,
            "generation": controller.loop.generation,
            "age": controller.loop.age,
            "state": controller.loop.state.value,
            "population": len(controller.loop.simulation.birds),
        }
    )


@app.get("/api/statistics")
async def statistics() -> JSONResponse:
    return JSONResponse([stats.as_dict() for stats in controller.history])


@app.post("/api/control/start")
async def start_simulation() -> JSONResponse:
    controller.running = True
    return JSONResponse({"running": True})


@app.post("/api/control/stop")
async def stop_simulation() -> JSONResponse:
    controller.running = False
    return JSONResponse({"running": False})


@app.post("/api/control/reset")
async def reset_simulation() -> JSONResponse:
    await controller.reset()
    return JSONResponse({"running": controller.running, "tick": controller.tick})


@app.post("/api/control/speed")
async def set_speed(payload: dict) -> JSONResponse:
    speed = float(payload.get("multiplier", 1.0))
    controller.speed_multiplier = max(0.1, min(5.0, speed))
    return JSONResponse({"multiplier": controller.speed_multiplier})


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await websocket.accept()
    controller.clients.add(websocket)
    controller._client_last_sent[websocket] = -1
    await controller._send_pending_snapshots(websocket)
    try:
        while True:
            message = await websocket.receive_text()
            try:
                payload = json.loads(message)
            except json.JSONDecodeError:
                continue
            if payload.get("type") == "ack":
                tick = payload.get("tick")
                if isinstance(tick, int):
                    await controller.acknowledge(tick)
    except WebSocketDisconnect:
        controller.clients.discard(websocket)
        controller._client_last_sent.pop(websocket, None)


__all__ = ["app", "controller"]
