def function_calls():
    def add(a, b):
        return a + b

    total = 0
    for i in range(100_000):
        total += add(i, i + 1)
    return total


print(function_calls())
