# Just a description, no declarations
def main(a, b=1):
    return a
