def main(flag=False):
    return flag
