import asyncio

from glide_client import ChatRequest, GlideClient, GlideError


async def main() -> None:
    async with GlideClient.from_env() as client:
        if not await client.health():
            print("Gateway is not healthy")
            return

        routers = await client.language.list_routers()
        if not routers or routers[0].routers is None:
            print("No routers configured")
            return
        router = routers[0].routers

        try:
            response = await client.language.chat(router, ChatRequest.from_message("Hello!"))
        except GlideError as e:
            print("Chat failed:", type(e).__name__, e)
            return
        print("response:", response.content)

        async with await client.language.stream_chat(router) as stream:
            await stream.send(ChatRequest.from_message("Hello again!"))
            print("streamed:", await stream.receive())


if __name__ == "__main__":
    asyncio.run(main())
