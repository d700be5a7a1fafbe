#!/usr/bin/env python3
"""
Demo script for the nano LLM cache.

Shows cosine similarity on simulated vectors, then runs the cache engine
with an in-memory store and the local sentence-transformers model.
"""

import asyncio
import time

from nano_llm_cache import CacheService, ChatCompletionRequest, ChatCompletionResponse, ChatMessage
from nano_llm_cache import calculate_similarity, create_chat_wrapper
from nano_llm_cache.dto import ChatChoice


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_similarity() -> None:
    """Demonstrate cosine similarity on simulated embeddings."""
    print_section("Vector Similarity (simulated 8-dimensional embeddings)")

    embeddings = {
        "What is the weather in London?": [0.12, -0.44, 0.88, 0.23, 0.56, -0.31, 0.78, 0.45],
        "Tell me the London weather": [0.13, -0.43, 0.89, 0.24, 0.57, -0.30, 0.79, 0.46],
        "How do I bake a cake?": [-0.65, 0.22, -0.11, 0.88, -0.33, 0.44, -0.22, 0.11],
        "Paris weather today": [0.15, -0.41, 0.87, 0.21, 0.54, -0.29, 0.76, 0.43],
    }
    threshold = 0.95
    base = "What is the weather in London?"

    for other in list(embeddings)[1:]:
        similarity = calculate_similarity(embeddings[base], embeddings[other])
        verdict = "✓ HIT" if similarity >= threshold else "✗ MISS"
        print(f"\n  '{base}' vs '{other}'")
        print(f"    Similarity: {similarity:.4f}  {verdict}")


async def demo_basic_cache() -> None:
    """Demonstrate basic cache operations."""
    print_section("Basic Cache Operations")

    cache = CacheService.create(similarity_threshold=0.8, storage_prefix="demo")

    print("\n⏳ Loading embedding model...")
    start = time.time()
    await cache.preload_model()
    print(f"  ✓ Loaded in {time.time() - start:.2f}s")

    qa_pairs = [
        ("What is the weather in London?", "Cloudy, 15°C"),
        ("How do I bake a cake?", "Mix flour, sugar and eggs, then bake at 180°C."),
    ]

    print("\n📝 Storing sample Q&A pairs...")
    for prompt, response in qa_pairs:
        await cache.save(prompt, response)
        print(f"  ✓ Stored: {prompt}")

    print("\n🔍 Querying:")
    for query in ["Tell me the London weather", "Recipe for a cake?", "What is quantum computing?"]:
        result = await cache.query(query)
        print(f"\n  Query: {query}")
        if result.hit:
            print(f"  ✓ CACHE HIT - Similarity: {result.similarity:.4f}")
            print(f"  Response: {result.response}")
        else:
            print(f"  ✗ Cache miss - Best similarity: {result.similarity}")

    stats = await cache.get_stats()
    print(f"\n📊 Stats: {stats.to_dict()}")

    await cache.clear()
    await cache.unload_model()


async def demo_chat_wrapper() -> None:
    """Demonstrate the chat-completion wrapper."""
    print_section("Chat Completion Wrapper")

    calls = 0

    async def fake_llm(request: ChatCompletionRequest) -> ChatCompletionResponse:
        nonlocal calls
        calls += 1
        return ChatCompletionResponse(
            id=f"live-{calls}",
            created=int(time.time()),
            model=request.model,
            choices=[
                ChatChoice(
                    index=0,
                    message=ChatMessage(role="assistant", content="Paris is the capital of France."),
                    finish_reason="stop",
                )
            ],
        )

    cache = CacheService.create(similarity_threshold=0.85, storage_prefix="demo-chat")
    create = create_chat_wrapper(cache, fake_llm)

    for text in ["What is the capital of France?", "Tell me France's capital city"]:
        request = ChatCompletionRequest(
            model="demo-model",
            messages=[ChatMessage(role="user", content=text)],
        )
        response = await create(request)
        print(f"\n  Q: {text}")
        print(f"  A: {response.content}  (id={response.id})")

    print(f"\n  LLM calls made: {calls}")
    await cache.clear()


async def main() -> None:
    """Run all demos."""
    print("\n🚀 Nano LLM Cache Demo")
    print("=" * 70)

    demo_similarity()

    try:
        await demo_basic_cache()
        await demo_chat_wrapper()

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nThe engine demos download the embedding model on first run;")
        print("check your network connection or set NANO_CACHE_MODEL.")


if __name__ == "__main__":
    asyncio.run(main())
