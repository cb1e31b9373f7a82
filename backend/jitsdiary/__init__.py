"""JitsDiary: a training log API for Brazilian Jiu-Jitsu, backed by PocketBase."""
