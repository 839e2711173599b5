import math


def complex_calculation():
    result = 0.0
    for i in range(1, 200_000):
        result += math.sqrt(i) * math.sin(i) / math.log(i + 1)
    return result


print(complex_calculation())
