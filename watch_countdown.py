#!/usr/bin/env python3
"""
Small script for watching the PromoShare countdown WebSocket by hand.

Usage:
    python watch_countdown.py                       # Print ticks until Ctrl+C
    python watch_countdown.py --ticks 5             # Stop after 5 ticks
    python watch_countdown.py --refresh-every 10    # Send REFRESH every 10 ticks
    python watch_countdown.py --url ws://... --token <bearer>
"""

import asyncio
import json
import sys

import websockets
from websockets.exceptions import ConnectionClosed


class CountdownWatcher:
    """Prints what the countdown endpoint sends."""

    def __init__(self, url: str = 'ws://localhost:8000/api/promoshare/countdown', token: str | None = None):
        self.url = f'{url}?token={token}' if token else url
        self.websocket = None

    async def connect(self):
        """Connect to the WebSocket server."""
        try:
            print(f'Connecting to {self.url}...')
            self.websocket = await websockets.connect(self.url)
            print('Connected\n')
            return True
        except Exception as e:
            print(f'Connection error: {e}')
            return False

    async def send(self, code: str, data=None):
        """Send a message with a code."""
        message = {'code': code, 'data': data}
        await self.websocket.send(json.dumps(message, ensure_ascii=False))
        print(f'>> {code}')

    async def receive(self):
        """Receive one message from the server and print it."""
        try:
            response = await self.websocket.recv()
            data = json.loads(response)
            code = data.get('code', 'UNKNOWN')
            data_content = data.get('data')

            if code == 'CONNECTION_ESTABLISHED':
                print('Connection established')
            elif code == 'DRAWS_UPDATED':
                draws = data_content.get('draws', []) if isinstance(data_content, dict) else []
                print(f'Draws updated: {len(draws)} active, '
                      f'jackpot {data_content.get("combined_jackpot")}, '
                      f'tickets {data_content.get("total_user_tickets")}')
                for draw in draws:
                    print(f'  {draw["label"]:<14} {draw["jackpot_amount"]:>8} gems  '
                          f'{draw["win_probability"]:>5}%  {draw["time_left"]}')
            elif code == 'COUNTDOWN_TICK':
                parts = [f'{draw_id}: {left["compact"]} {left["seconds"]:02d}s' for draw_id, left in data_content.items()]
                print('  '.join(parts))
            elif code == 'COUNTDOWN_IDLE':
                print('No active draws')
            elif code == 'ERROR':
                msg = data_content.get('message', '') if isinstance(data_content, dict) else ''
                print(f'Error: {msg}')
            else:
                print(f'<< {code}')

            return data
        except ConnectionClosed:
            print('Connection closed')
            return None

    async def watch(self, ticks: int | None, refresh_every: int | None):
        """Print messages, optionally stopping after a number of ticks."""
        seen = 0
        while True:
            message = await self.receive()
            if not message:
                return
            if message.get('code') != 'COUNTDOWN_TICK':
                continue

            seen += 1
            if ticks and seen >= ticks:
                return
            if refresh_every and seen % refresh_every == 0:
                await self.send('REFRESH')

    async def close(self):
        """Close the connection."""
        if self.websocket:
            await self.websocket.close()
            print('\nConnection closed')


async def main():
    """Entry point."""
    import argparse

    parser = argparse.ArgumentParser(description='Watch the PromoShare countdown WebSocket')
    parser.add_argument(
        '--url',
        type=str,
        default='ws://localhost:8000/api/promoshare/countdown',
        help='URL of the WebSocket endpoint',
    )
    parser.add_argument('--token', type=str, help='Bearer token forwarded to Promorang')
    parser.add_argument('--ticks', type=int, help='Stop after this many ticks')
    parser.add_argument('--refresh-every', type=int, help='Send REFRESH every N ticks')

    args = parser.parse_args()

    watcher = CountdownWatcher(url=args.url, token=args.token)

    try:
        if not await watcher.connect():
            sys.exit(1)
        await watcher.watch(args.ticks, args.refresh_every)
    except KeyboardInterrupt:
        print('\nInterrupted')
    finally:
        await watcher.close()


if __name__ == '__main__':
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print('\nBye')
