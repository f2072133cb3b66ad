"""
Demonstration of the facets census on the worked example

    A_1 = {1, 3, 5, 6}
    A_2 = {2, 4, 5, 16, 20}
    A_3 = {0, 2, 5}

There is 1 subset of size 0, 9 subsets of size 1, 18 subsets of size 2 etc.
"""

from facets import SetStore, SubsetCensus, brute_force_histogram, walk_subsets


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demonstrate_chain():
    print_section("Chain walk over A = {1, 5, 2}")

    store = SetStore.from_sets([[1, 5, 2]])
    record = store[0]
    print(f"mask  = {record.mask:06b}")
    for j, entry in enumerate(record.chain):
        print(f"chain[{j}] = {entry:06b}")

    print("\nVisit order:")
    for subset, size in walk_subsets(record):
        members = [b for b in range(64) if subset >> b & 1]
        print(f"  {subset:06b}  size={size}  {members}")


def demonstrate_census():
    print_section("Census of the worked example")

    sets = [[1, 3, 5, 6], [2, 4, 5, 16, 20], [0, 2, 5]]
    store = SetStore.from_sets(sets)
    result = SubsetCensus().run(store)

    for k, count in result.histogram.as_dict().items():
        print(f"  size {k}: {count}")
    print(f"\nVisited {result.subsets_visited} subsets, "
          f"{result.duplicates_skipped} already covered by an earlier set")

    reference = brute_force_histogram(sets)
    print(f"Brute force agrees: {reference == result.histogram}")


if __name__ == "__main__":
    demonstrate_chain()
    demonstrate_census()
